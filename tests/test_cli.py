import pytest

from primgen import config
from primgen.cli import main
from primgen.io3d import read_mesh


def test_box_command(tmp_path, capsys) -> None:
    out = tmp_path / "box.3d"
    assert main(["box", "2", "1", str(out)]) == 0
    lines = out.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "36"
    assert len(lines) == 37
    printed = capsys.readouterr().out
    assert "Total: 36 vertices (12 triangles)" in printed


@pytest.mark.parametrize("argv, flags, triangles", [
    (["plane", "4", "2"], [], 8),
    (["plane", "4", "2"], ["--double-sided"], 16),
    (["sphere", "1", "8", "4"], [], 2 * 8 * 2 + 16),
    (["cone", "1", "2", "8", "3"], [], 8 + 8 * 2 * 2 + 8),
])
def test_shape_commands(tmp_path, argv, flags, triangles) -> None:
    out = tmp_path / "shape.3d"
    assert main(argv + [str(out)] + flags) == 0
    assert read_mesh(out).triangle_count == triangles


def test_no_count_flag(tmp_path) -> None:
    out = tmp_path / "plane.3d"
    assert main(["plane", "1", "1", str(out), "--no-count"]) == 0
    assert len(out.read_text(encoding="utf-8").splitlines()) == 6


def test_validation_error_writes_nothing(tmp_path, capsys) -> None:
    out = tmp_path / "sphere.3d"
    assert main(["sphere", "0", "8", "4", str(out)]) == 1
    assert not out.exists()
    err = capsys.readouterr().err
    assert "radius" in err and "0.0" in err


def test_min_radius_option(tmp_path) -> None:
    out = tmp_path / "cone.3d"
    assert main(["cone", "0.2", "1", "8", "2", str(out), "--min-radius", "0.5"]) == 1
    assert not out.exists()
    assert main(["cone", "0.2", "1", "8", "2", str(out)]) == 0


def test_bad_number_is_reported(tmp_path, capsys) -> None:
    assert main(["box", "2", "many", str(tmp_path / "b.3d")]) == 1
    assert "divisions" in capsys.readouterr().err


def test_unwritable_output(tmp_path, capsys) -> None:
    out = tmp_path / "nope" / "box.3d"
    assert main(["box", "1", "1", str(out)]) == 1
    assert str(out) in capsys.readouterr().err


def test_output_dir_from_config(tmp_path, monkeypatch) -> None:
    monkeypatch.setattr(config, "OUTPUT_DIR", tmp_path)
    assert main(["box", "1", "1", "rel.3d"]) == 0
    assert (tmp_path / "rel.3d").exists()


def test_unknown_shape_is_usage_error() -> None:
    with pytest.raises(SystemExit) as exc:
        main(["torus", "1", "out.3d"])
    assert exc.value.code == 2


def test_missing_parameter_is_usage_error(tmp_path) -> None:
    with pytest.raises(SystemExit) as exc:
        main(["sphere", "1", "8", str(tmp_path / "s.3d")])
    assert exc.value.code == 2


def test_info_command(tmp_path, capsys) -> None:
    out = tmp_path / "box.3d"
    main(["box", "2", "1", str(out)])
    capsys.readouterr()
    assert main(["info", str(out)]) == 0
    printed = capsys.readouterr().out
    assert "36 vertices (12 triangles)" in printed
    assert "signed volume: 8" in printed


def test_info_on_corrupt_file(tmp_path, capsys) -> None:
    bad = tmp_path / "bad.3d"
    bad.write_text("0 0 0\n1 1\n", encoding="utf-8")
    assert main(["info", str(bad)]) == 1
    assert "line 2" in capsys.readouterr().err


def test_info_on_binary_file(tmp_path, capsys) -> None:
    bad = tmp_path / "bad.3d"
    bad.write_bytes(b"3\n0 0 0\n1 0 0\n0 1 \xff\n")
    assert main(["info", str(bad)]) == 1
    assert "not a UTF-8 text file" in capsys.readouterr().err
