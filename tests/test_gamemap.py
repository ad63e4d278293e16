import pytest

from solong.gamemap import (
    MapError,
    count_object,
    find_start,
    flood_fill,
    has_closed_border,
    has_extension,
    has_only_known_items,
    has_valid_path,
    is_rectangle,
    load_map,
    read_map,
    validate_map,
)

VALID = ["1111111", "1P0C0E1", "1111111"]


def write(tmp_path, name, text):
    path = tmp_path / name
    path.write_text(text)
    return path


@pytest.mark.parametrize(
    "path, expected",
    [
        ("maps/level.ber", True),
        (".ber", True),
        ("level.txt", False),
        ("level.BER", False),
        ("", False),
    ],
)
def test_has_extension(path, expected):
    assert has_extension(path, ".ber") is expected


def test_has_extension_empty_ext():
    assert has_extension("level.ber", "") is False


def test_read_map_with_final_newline(tmp_path):
    path = write(tmp_path, "a.ber", "\n".join(VALID) + "\n")
    assert read_map(path) == VALID


def test_read_map_without_final_newline(tmp_path):
    path = write(tmp_path, "a.ber", "\n".join(VALID))
    assert read_map(path) == VALID


@pytest.mark.parametrize("text", ["", "111\n\n111\n", "111\n111\n\n", "\n111\n"])
def test_read_map_rejects_blank_lines(tmp_path, text):
    path = write(tmp_path, "a.ber", text)
    with pytest.raises(MapError):
        read_map(path)


def test_read_map_missing_file(tmp_path):
    with pytest.raises(MapError):
        read_map(tmp_path / "absent.ber")


def test_is_rectangle():
    assert is_rectangle(VALID) is True
    assert is_rectangle(["111", "11", "111"]) is False


def test_has_closed_border():
    assert has_closed_border(VALID) is True
    assert has_closed_border(["1111", "0PC1", "1111"]) is False
    assert has_closed_border(["1111", "1PC0", "1111"]) is False
    assert has_closed_border(["1111", "1PC1", "1101"]) is False


def test_has_only_known_items():
    assert has_only_known_items(VALID) is True
    assert has_only_known_items(["111", "1X1", "111"]) is False


def test_count_object():
    rows = ["11111", "1CPC1", "11111"]
    assert count_object(rows, "C") == 2
    assert count_object(rows, "E") == 0


def test_find_start_points_at_player():
    y, x = find_start(VALID)
    assert VALID[y][x] == "P"


def test_find_start_without_player():
    with pytest.raises(MapError):
        find_start(["111", "101", "111"])


def test_flood_fill_stops_at_walls_and_exit():
    grid = [list(row) for row in ["111111", "10E0C1", "111111"]]
    flood_fill(grid, (1, 1))
    assert "".join(grid[1]) == "1  0C1"
    assert "".join(grid[0]) == "111111"


def test_has_valid_path_true():
    assert has_valid_path(VALID) is True


def test_has_valid_path_isolated_collectable():
    rows = ["1111111", "1P01C01", "1E01111", "1111111"]
    assert has_valid_path(rows) is False


def test_has_valid_path_collectable_behind_exit():
    assert has_valid_path(["11111", "1PEC1", "11111"]) is False


def test_validate_map_accepts_valid():
    validate_map(VALID)
    assert VALID == ["1111111", "1P0C0E1", "1111111"]


@pytest.mark.parametrize(
    "rows, message",
    [
        ([], "Problem of map format"),
        (["1111", "1PCE11", "1111"], "not a Rectangle"),
        (["1111", "0PCE", "1111"], "Border"),
        (["111111", "1PCEX1", "111111"], "items unknown"),
        (["111111", "1PPCE1", "111111"], "Player"),
        (["111111", "10C0E1", "111111"], "Player"),
        (["111111", "1PCEE1", "111111"], "Exit"),
        (["111111", "1P00E1", "111111"], "Collectables"),
        (["111111", "1P1CE1", "111111"], "no path possible"),
    ],
)
def test_validate_map_errors(rows, message):
    with pytest.raises(MapError) as info:
        validate_map(rows)
    assert str(info.value) == message


def test_load_map(tmp_path):
    path = write(tmp_path, "level.ber", "\n".join(VALID) + "\n")
    assert load_map(path) == VALID


def test_load_map_wrong_extension(tmp_path):
    path = write(tmp_path, "level.txt", "\n".join(VALID) + "\n")
    with pytest.raises(MapError, match="file type"):
        load_map(path)


def test_load_map_invalid_content(tmp_path):
    path = write(tmp_path, "level.ber", "1111\n1PC1\n1111\n")
    with pytest.raises(MapError, match="Exit"):
        load_map(path)