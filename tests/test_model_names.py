import json

import pytest

from ipltools.converters import ModelNameTable, PlaceholderModelNames
from ipltools.errors import FileAccessError

IDE_TEXT = """# Item definitions
objs
615, veg_tree3, gta_tree_boak, 150, 0
616, veg_tree4, gta_tree_boak, 150, 0
bad, line, here
end
tobj
700, nt_lamp01, lamps, 100, 0, 20, 6
end
txdp
gta_tree_boak, gta_tree_generic
end
cars
400, landstal, landstal, car, LANDSTAL, LANDSTK, null, normal, 10, 0, 0, -1, 0.768, 0.768, 0
end
"""


def test_ide_sections(tmp_path):
    path = tmp_path / "default.ide"
    path.write_text(IDE_TEXT)

    table = ModelNameTable.load([path])

    assert len(table) == 4
    assert table.get_name(615) == "veg_tree3"
    assert table.get_name(700) == "nt_lamp01"
    assert table.get_name(400) == "landstal"
    assert table.lookup(12345) is None
    assert table.get_name(12345) == "unknown"


def test_json_table_and_override(tmp_path):
    ide = tmp_path / "default.ide"
    ide.write_text(IDE_TEXT)
    overrides = tmp_path / "names.json"
    overrides.write_text(json.dumps({"615": "veg_tree3_new", "18000": "custom_model"}))

    table = ModelNameTable.load([ide, overrides])

    assert table.get_name(615) == "veg_tree3_new"
    assert table.get_name(18000) == "custom_model"
    assert 616 in table


def test_json_must_be_an_object(tmp_path):
    path = tmp_path / "names.json"
    path.write_text("[1, 2, 3]")
    with pytest.raises(ValueError):
        ModelNameTable.load([path])


def test_missing_model_file(tmp_path):
    with pytest.raises(FileAccessError):
        ModelNameTable.load([tmp_path / "missing.ide"])


def test_placeholder_ignores_ids():
    names = PlaceholderModelNames()
    assert names.get_name(615) == "placeholder_modelname"
    assert names.lookup(615) is None
