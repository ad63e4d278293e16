from pathlib import Path

import pytest

from solong.app import TEXTURES, load_textures, main, missing_textures, run
from solong.gamemap import MapError
from solong.xpm import XpmError

VALID_MAP = "11111\n1PCE1\n11111\n"


def _xpm(color: str) -> str:
    return f'static char *img[] = {{\n"1 1 1 1",\n"a c {color}",\n"a"\n}};\n'


def _write_all_textures(directory: Path) -> None:
    directory.mkdir(parents=True, exist_ok=True)
    for _, name, _ in TEXTURES:
        (directory / name).write_text(_xpm("#FF0000"))


def test_missing_textures_lists_everything_in_order(tmp_path):
    missing = missing_textures(tmp_path)
    assert [label for label, _ in missing] == [label for _, _, label in TEXTURES]
    assert missing[0] == ("Tile image", tmp_path / "tile.xpm")


def test_missing_textures_empty_when_all_present(tmp_path):
    _write_all_textures(tmp_path)
    assert missing_textures(tmp_path) == []


def test_missing_textures_reports_only_absent_file(tmp_path):
    _write_all_textures(tmp_path)
    (tmp_path / "wall.xpm").unlink()
    assert missing_textures(tmp_path) == [("Wall image", tmp_path / "wall.xpm")]


def test_load_textures_decodes_each_file(tmp_path):
    _write_all_textures(tmp_path)
    (tmp_path / "coll.xpm").write_text(_xpm("#00FF00"))
    textures = load_textures(tmp_path)
    assert set(textures) == {key for key, _, _ in TEXTURES}
    assert textures["tile"].pixel(0, 0) == 0xFF0000
    assert textures["coll"].pixel(0, 0) == 0x00FF00


def test_load_textures_raises_when_file_missing(tmp_path):
    with pytest.raises(XpmError):
        load_textures(tmp_path)


def test_main_rejects_wrong_argument_count(capsys):
    assert main([]) == 0
    assert capsys.readouterr().out == "Error\narguments"


def test_main_rejects_two_arguments(capsys):
    assert main(["a.ber", "b.ber"]) == 0
    assert capsys.readouterr().out == "Error\narguments"


def test_main_rejects_wrong_extension(tmp_path, capsys):
    path = tmp_path / "map.txt"
    path.write_text(VALID_MAP)
    assert main([str(path)]) == 0
    assert capsys.readouterr().out == "Error\nProblem file type '.ber'"


def test_main_reports_border_error(tmp_path, capsys):
    path = tmp_path / "map.ber"
    path.write_text("11111\n1PCE0\n11111\n")
    assert main([str(path)]) == 0
    assert capsys.readouterr().out == "Error\nBorder"


def test_main_reports_missing_textures(tmp_path, capsys, monkeypatch):
    path = tmp_path / "map.ber"
    path.write_text(VALID_MAP)
    monkeypatch.chdir(tmp_path)
    assert main([str(path)]) == 0
    out = capsys.readouterr().out
    assert out.startswith("Error\nTile image missing textures/tile.xpm\n")
    assert out.count("Error\n") == len(TEXTURES)


def test_run_raises_map_error_for_bad_map(tmp_path):
    path = tmp_path / "map.ber"
    path.write_text("11111\n1PC01\n11111\n")
    with pytest.raises(MapError, match="Exit"):
        run(path, tmp_path)


def test_run_reports_single_missing_texture(tmp_path, capsys):
    path = tmp_path / "map.ber"
    path.write_text(VALID_MAP)
    textures = tmp_path / "tex"
    _write_all_textures(textures)
    (textures / "noexit.xpm").unlink()
    assert run(path, textures) == 0
    assert capsys.readouterr().out == f"Error\nNo exit image missing {textures / 'noexit.xpm'}\n"