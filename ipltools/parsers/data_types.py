"""
Data types for IPL parsing.

Binary-side records (Header, ObjectInstance, ParkedVehicle) mirror the
on-disk layout. TextRecord is the shape the LOD resolver works with,
whatever the file came from.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ..constants import NO_LOD
from ..geometry import quaternion_to_euler

Vector3 = Tuple[float, float, float]
Quaternion = Tuple[float, float, float, float]


@dataclass
class Header:
    """Binary IPL header. Fields in on-disk order after the magic."""
    item_instances: int
    unknown1: int
    unknown2: int
    unknown3: int
    parked_cars: int
    unknown4: int
    offset_item_instances: int  # Usually 76, right after the header
    unused1: int
    offset_unknown1: int
    unused2: int
    offset_unknown2: int
    unused3: int
    offset_unknown3: int
    unused4: int
    offset_parked_cars: int
    unused5: int
    offset_unknown4: int
    unused6: int


@dataclass
class ObjectInstance:
    """One entry of the binary item instance array."""
    model_id: int
    position: Vector3
    rotation: Quaternion  # (x, y, z, w)
    interior_flag: int  # Always 0 in shipped files, kept verbatim
    flags: int  # LOD index into the non-stream IPL, -1 for none

    @property
    def lod_index(self) -> Optional[int]:
        if self.flags == NO_LOD:
            return None
        return self.flags


@dataclass
class ParkedVehicle:
    """One entry of the binary parked car array."""
    position: Vector3
    angle: float  # Around the Z axis
    vehicle_id: int
    flags: Tuple[int, ...]  # 7 opaque values


@dataclass
class TextRecord:
    """Object line of a text IPL (or a decoded binary object)."""
    model_id: int
    model_name: str
    interior_id: int
    position: Vector3
    rotation: Quaternion
    lod_index: Optional[int] = None

    @property
    def euler_angles(self) -> Vector3:
        """Rotation as (rx, ry, rz) in degrees."""
        return quaternion_to_euler(*self.rotation)


@dataclass
class BinaryIPL:
    """Result of decoding one binary IPL buffer."""
    header: Header
    objects: List[ObjectInstance] = field(default_factory=list)
    cars: List[ParkedVehicle] = field(default_factory=list)
    truncations: list = field(default_factory=list)  # TruncatedRecord instances

    @property
    def is_truncated(self) -> bool:
        return bool(self.truncations)
