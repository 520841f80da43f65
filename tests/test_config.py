from pathlib import Path

from ipltools.config import load_tool_config


def test_missing_file_gives_defaults(tmp_path):
    config = load_tool_config(tmp_path / "ipltools.ini")

    assert config.input_dir == Path("input")
    assert config.output_dir == Path("output")
    assert config.normal_ipls_dir == Path("other_stuff/normal_ipls")
    assert config.lod_table_path == Path("server/lod_table.hpp")
    assert config.model_files == []
    assert config.placeholder_names is False
    assert config.header_comment.startswith("#")
    assert config.source is None


def test_values_resolved_against_ini_folder(tmp_path):
    ini = tmp_path / "ipltools.ini"
    ini.write_text(
        "[paths]\n"
        "input = binary\n"
        "output = converted\n"
        "lod_table = /abs/lod_table.hpp\n"
        "\n"
        "[models]\n"
        "files = data/default.ide\n"
        "        data/vehicles.ide\n"
        "placeholder = yes\n"
        "\n"
        "[output]\n"
        "header_comment = # custom header\n"
    )

    config = load_tool_config(ini)

    assert config.source == ini
    assert config.input_dir == tmp_path / "binary"
    assert config.output_dir == tmp_path / "converted"
    assert config.normal_ipls_dir == Path("other_stuff/normal_ipls")
    assert config.lod_table_path == Path("/abs/lod_table.hpp")
    assert config.model_files == [tmp_path / "data/default.ide", tmp_path / "data/vehicles.ide"]
    assert config.placeholder_names is True
    assert config.header_comment == "# custom header"


def test_empty_header_comment_disables_it(tmp_path):
    ini = tmp_path / "ipltools.ini"
    ini.write_text("[output]\nheader_comment =\n")

    assert load_tool_config(ini).header_comment is None
