from ipltools.cli import main
from ipl_samples import build_binary_ipl, pack_object, pack_car, text_ipl


def base_args(tmp_path):
    return [
        "--config", str(tmp_path / "none.ini"),
        "--input-dir", str(tmp_path / "input"),
        "--output-dir", str(tmp_path / "output"),
        "--log", str(tmp_path / "cli.log"),
    ]


def test_convert_all(tmp_path):
    input_dir = tmp_path / "input"
    input_dir.mkdir()
    (input_dir / "countn2_stream0.ipl").write_bytes(
        build_binary_ipl(objects=[pack_object(615, flags=0)], cars=[pack_car(400)])
    )
    (input_dir / "not_binary.ipl").write_text("inst\nend\n")
    ide = tmp_path / "default.ide"
    ide.write_text("objs\n615, veg_tree3, txd, 100, 0\nend\n")

    status = main(base_args(tmp_path) + ["--models", str(ide), "convert-all"])

    assert status == 0
    text = (tmp_path / "output" / "countn2_stream0.ipl").read_text()
    lines = text.split("\n")
    assert lines[1] == "inst"
    assert lines[2].startswith("615, veg_tree3, 0, ")
    assert lines[2].endswith(", 0")
    assert "cars" in lines
    assert not (tmp_path / "output" / "not_binary.ipl").exists()


def test_convert_all_without_input_folder(tmp_path):
    assert main(base_args(tmp_path) + ["convert-all"]) == 1


def test_convert_one_with_output_name(tmp_path):
    input_dir = tmp_path / "input"
    input_dir.mkdir()
    (input_dir / "a_stream0.ipl").write_bytes(build_binary_ipl(objects=[pack_object(1)]))

    status = main(base_args(tmp_path) + ["--placeholder-names", "--no-header",
                                         "convert", "a_stream0.ipl", "renamed.ipl"])

    assert status == 0
    assert (tmp_path / "output" / "renamed.ipl").read_text().split("\n") == [
        "inst",
        "1, placeholder_modelname, 0, 0.000000, 0.000000, 0.000000, "
        "0.000000, 0.000000, 0.000000, 1.000000, -1",
        "end",
    ]


def test_convert_missing_file(tmp_path):
    assert main(base_args(tmp_path) + ["convert", "nope.ipl"]) == 1


def test_lods_command(tmp_path):
    output_dir = tmp_path / "output"
    output_dir.mkdir()
    (output_dir / "a_stream0.ipl").write_text(
        text_ipl("10, hi, 0, 0, 0, 0, 0, 0, 0, 1, 0")
    )
    text_dir = tmp_path / "normal"
    text_dir.mkdir()
    (text_dir / "A.ipl").write_text(text_ipl("20, lo, 0, 0, 0, 0, 0, 0, 0, 1, -1"))
    ide = tmp_path / "default.ide"
    ide.write_text("objs\n10, hi_model, txd, 100, 0\n20, lo_model, txd, 100, 0\nend\n")
    lod_table = tmp_path / "server" / "lod_table.hpp"

    status = main(base_args(tmp_path) + [
        "--models", str(ide),
        "lods", "--text-dir", str(text_dir), "--output", str(lod_table),
    ])

    assert status == 0
    assert lod_table.read_text() == (
        "// Total: 1\n"
        "OBJ_LOD_MODELS = {{\n"
        "{10, 20}, // hi_model => lo_model (A)\n"
        "}};"
    )


def test_lods_names_models_even_with_placeholder_names(tmp_path):
    output_dir = tmp_path / "output"
    output_dir.mkdir()
    (output_dir / "a_stream0.ipl").write_text(
        text_ipl("10, placeholder_modelname, 0, 0, 0, 0, 0, 0, 0, 1, 0")
    )
    text_dir = tmp_path / "normal"
    text_dir.mkdir()
    (text_dir / "A.ipl").write_text(text_ipl("20, lo, 0, 0, 0, 0, 0, 0, 0, 1, -1"))
    ide = tmp_path / "default.ide"
    ide.write_text("objs\n10, hi_model, txd, 100, 0\n20, lo_model, txd, 100, 0\nend\n")
    lod_table = tmp_path / "lod_table.hpp"

    status = main(base_args(tmp_path) + [
        "--models", str(ide), "--placeholder-names",
        "lods", "--text-dir", str(text_dir), "--output", str(lod_table),
    ])

    assert status == 0
    assert "{10, 20}, // hi_model => lo_model (A)\n" in lod_table.read_text()
