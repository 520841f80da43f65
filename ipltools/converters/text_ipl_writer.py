"""
Text IPL Writer

Renders decoded binary IPL records as a text IPL:

    # IPL generated with ipl-tools
    inst
    615, veg_tree3, 0, 1.000000, 2.000000, 3.000000, 0.000000, 0.000000, 0.000000, 1.000000, -1
    end
    cars
    100.000000, 200.000000, 10.000000, 90.000000, 400, 0, 0, 0, 0, 0, 0, 0
    end

The cars section is only written when there are parked vehicles. The last
field of an inst line is the binary flags value, which is the LOD index.
"""

from typing import List, Optional, Sequence

from ..constants import DEFAULT_HEADER_COMMENT, SECTION_CARS, SECTION_END, SECTION_INST
from ..parsers.data_types import ObjectInstance, ParkedVehicle
from .model_names import ModelNameResolver, ModelNameTable

INST_LINE_FORMAT = "%d, %s, %d, %.6f, %.6f, %.6f, %.6f, %.6f, %.6f, %.6f, %d"
CARS_LINE_FORMAT = "%.6f, %.6f, %.6f, %.6f, %d" + ", %d" * 7


def format_object(obj: ObjectInstance, model_name: str) -> str:
    x, y, z = obj.position
    rx, ry, rz, rw = obj.rotation
    return INST_LINE_FORMAT % (
        obj.model_id, model_name, obj.interior_flag,
        x, y, z, rx, ry, rz, rw, obj.flags,
    )


def format_car(car: ParkedVehicle) -> str:
    x, y, z = car.position
    return CARS_LINE_FORMAT % (x, y, z, car.angle, car.vehicle_id, *car.flags)


def encode(objects: Sequence[ObjectInstance],
           cars: Optional[Sequence[ParkedVehicle]] = None,
           model_names: Optional[ModelNameResolver] = None,
           header_comment: Optional[str] = DEFAULT_HEADER_COMMENT) -> str:
    """
    Build text IPL contents.

    Args:
        objects: Item instances, written in order
        cars: Parked vehicles (cars section skipped when empty)
        model_names: Name strategy, defaults to an empty lookup table
                     (every name becomes 'unknown')
        header_comment: First line, or None for no comment line

    Returns:
        Text with '\\n' line endings and no trailing newline
    """
    if model_names is None:
        model_names = ModelNameTable()

    lines: List[str] = []
    if header_comment:
        lines.append(header_comment)

    lines.append(SECTION_INST)
    for obj in objects:
        lines.append(format_object(obj, model_names.get_name(obj.model_id)))
    lines.append(SECTION_END)

    if cars:
        lines.append(SECTION_CARS)
        for car in cars:
            lines.append(format_car(car))
        lines.append(SECTION_END)

    return "\n".join(lines)
