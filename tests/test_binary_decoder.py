import struct

import pytest

from ipltools.constants import OBJECT_INSTANCE_SIZE, PARKED_CAR_SIZE
from ipltools.errors import InvalidHeader, TruncatedRecord
from ipltools.parsers import BinaryIPLParser, decode, parse_header, is_binary_ipl
from ipltools.parsers.binary_ipl import OBJECT_DTYPE, CAR_DTYPE
from ipltools.utils import get_counts, get_warnings
from ipl_samples import build_binary_ipl, pack_object, pack_car


def test_decode_objects():
    data = build_binary_ipl(objects=[
        pack_object(615, position=(1.5, -2.25, 10.0), rotation=(0.0, 0.0, 0.5, 0.5), flags=3),
        pack_object(780),
    ])

    ipl = decode(data)

    assert len(ipl.objects) == 2
    first, second = ipl.objects
    assert first.model_id == 615
    assert first.position == (1.5, -2.25, 10.0)
    assert first.rotation == (0.0, 0.0, 0.5, 0.5)
    assert first.interior_flag == 0
    assert first.flags == 3
    assert first.lod_index == 3
    assert second.flags == -1
    assert second.lod_index is None
    assert ipl.cars == []
    assert not ipl.is_truncated


def test_decode_parked_cars():
    data = build_binary_ipl(
        objects=[pack_object(615)],
        cars=[pack_car(400, position=(100.0, 200.0, 10.5), angle=90.0, flags=(1, 2, 3, -1, 5, 6, 7))],
    )

    ipl = decode(data)

    assert len(ipl.cars) == 1
    car = ipl.cars[0]
    assert car.vehicle_id == 400
    assert car.position == (100.0, 200.0, 10.5)
    assert car.angle == 90.0
    assert car.flags == (1, 2, 3, -1, 5, 6, 7)


def test_zero_parked_cars_ignores_car_data():
    data = build_binary_ipl(objects=[pack_object(615)], cars=[pack_car(400)], car_count=0)
    assert decode(data).cars == []


def test_header_fields_in_order():
    data = build_binary_ipl(objects=[pack_object(1)], unknowns=(11, 12, 13, 14))
    header = parse_header(data)

    assert header.item_instances == 1
    assert (header.unknown1, header.unknown2, header.unknown3, header.unknown4) == (11, 12, 13, 14)
    assert header.parked_cars == 0
    assert header.offset_item_instances == 76
    assert header.offset_parked_cars == 76 + 40


def test_object_offset_taken_from_header():
    data = build_binary_ipl(objects=[pack_object(615)], padding=b"\xAA" * 12)
    ipl = decode(data)

    assert ipl.header.offset_item_instances == 88
    assert [obj.model_id for obj in ipl.objects] == [615]


def test_invalid_magic_rejected():
    data = b"BNRY" + build_binary_ipl(objects=[pack_object(615)])[4:]
    with pytest.raises(InvalidHeader):
        decode(data)
    assert not is_binary_ipl(data)


def test_text_file_rejected():
    with pytest.raises(InvalidHeader):
        decode(b"# text ipl\ninst\nend\n")


def test_short_header_rejected():
    with pytest.raises(InvalidHeader):
        decode(b"bnry" + b"\x00" * 20)


def test_truncated_objects_keep_complete_records():
    data = build_binary_ipl(objects=[pack_object(1), pack_object(2)], item_count=3)

    ipl = decode(data, source="trunc_stream0.ipl")

    assert [obj.model_id for obj in ipl.objects] == [1, 2]
    assert len(ipl.truncations) == 1
    truncation = ipl.truncations[0]
    assert isinstance(truncation, TruncatedRecord)
    assert truncation.kind == "object"
    assert truncation.index == 3
    assert truncation.offset == 76 + 80
    assert get_counts() == (0, 1)
    assert "object 3" in get_warnings()[0]


def test_partial_record_is_dropped():
    # Second record is cut in half
    data = build_binary_ipl(objects=[pack_object(1), pack_object(2)])[:-20]
    ipl = decode(data)

    assert [obj.model_id for obj in ipl.objects] == [1]
    assert ipl.truncations[0].index == 2


def test_truncated_cars():
    data = build_binary_ipl(objects=[pack_object(1)], cars=[pack_car(400)], car_count=2)

    ipl = decode(data)

    assert len(ipl.objects) == 1
    assert len(ipl.cars) == 1
    assert ipl.truncations[0].kind == "car"
    assert ipl.truncations[0].index == 2


def test_offset_past_end_gives_no_objects():
    data = bytearray(build_binary_ipl(objects=[pack_object(1)]))
    struct.pack_into('<i', data, 4 + 6 * 4, 10_000)  # offset_item_instances

    ipl = decode(bytes(data))

    assert ipl.objects == []
    assert ipl.truncations[0].index == 1


def test_parser_reads_file(tmp_path):
    path = tmp_path / "countn2_stream0.ipl"
    path.write_bytes(build_binary_ipl(objects=[pack_object(615)], cars=[pack_car(400)]))

    parser = BinaryIPLParser(path)

    assert parser.header.item_instances == 1
    assert parser.objects[0].model_id == 615
    assert parser.cars[0].vehicle_id == 400


def test_record_dtypes_match_strides():
    assert OBJECT_DTYPE.itemsize == OBJECT_INSTANCE_SIZE
    assert CAR_DTYPE.itemsize == PARKED_CAR_SIZE
    assert len(pack_object(1)) == OBJECT_INSTANCE_SIZE
    assert len(pack_car(400)) == PARKED_CAR_SIZE
