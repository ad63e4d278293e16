import pytest

from solong.colors import lookup_color
from solong.xpm import (
    XpmError,
    XpmImage,
    convert_color,
    load_xpm,
    parse_color,
    parse_xpm,
    parse_xpm_text,
    split_words,
    strip_comments,
)

SAMPLE_LINES = [
    "2 2 3 1",
    ". c None",
    "r c red",
    "b c #0000FF",
    "r.",
    "br",
]

SAMPLE_FILE = """/* XPM */
static char *sample[] = {
/* columns rows colors chars-per-pixel */
"2 2 3 1",
". c None",
"r c red", // a comment
"b c #0000FF",
/* pixels */
"r.",
"br"
};
"""


def test_split_words_spaces_and_tabs():
    assert split_words("  a\tb  \t c ") == ["a", "b", "c"]


def test_split_words_empty():
    assert split_words(" \t ") == []


def test_strip_comments_keeps_length_and_blanks_block():
    text = 'x/* hidden */y'
    result = strip_comments(text)
    assert len(result) == len(text)
    assert result == "x" + " " * 12 + "y"


def test_strip_comments_leaves_quoted_markers():
    text = '"a/*b*/" z'
    assert strip_comments(text) == text


def test_strip_comments_line_comment_eats_newline():
    result = strip_comments('"a" // note\n"b"')
    assert "\n" not in result
    assert result.startswith('"a"')
    assert result.endswith('"b"')


def test_parse_color_hex():
    assert parse_color("#0000FF") == 0x0000FF


def test_parse_color_named_and_none():
    assert parse_color("red") == lookup_color("red")
    assert parse_color("None") == -1


def test_parse_color_with_suffix_joins_words():
    assert parse_color("dark", "red") == lookup_color("dark red")


def test_parse_color_unknown_is_zero():
    assert parse_color("no-such-colour") == 0


def test_convert_color_deep_visual_is_identity():
    assert convert_color(0x123456, 24, (0xFF0000, 0xFF00, 0xFF)) == 0x123456


def test_convert_color_shallow_visual_white_fills_masks():
    masks = (0xF800, 0x07E0, 0x001F)
    assert convert_color(0xFFFFFF, 16, masks) == masks[0] | masks[1] | masks[2]
    assert convert_color(0x000000, 16, masks) == 0


def test_convert_color_rejects_empty_mask():
    with pytest.raises(ValueError):
        convert_color(0xFFFFFF, 16, (0, 0x07E0, 0x001F))


def test_parse_xpm_pixels():
    image = parse_xpm(SAMPLE_LINES)
    assert (image.width, image.height) == (2, 2)
    assert image.pixel(0, 0) == lookup_color("red")
    assert image.pixel(1, 0) == 0xFF000000
    assert image.pixel(0, 1) == 0x0000FF
    assert image.pixel(1, 1) == lookup_color("red")


def test_parse_xpm_multi_char_keys():
    image = parse_xpm(["3 1 2 3", "aaa c #000001", "bbb c #000002", "bbbaaabbb"])
    assert image.pixels == (0x000002, 0x000001, 0x000002)


def test_parse_xpm_unknown_key_is_zero():
    image = parse_xpm(["1 1 1 1", "a c #00FF00", "z"])
    assert image.pixels == (0,)


def test_parse_xpm_zero_header_value():
    with pytest.raises(XpmError):
        parse_xpm(["0 2 1 1", "a c red", "a", "a"])


def test_parse_xpm_missing_c_entry():
    with pytest.raises(XpmError):
        parse_xpm(["1 1 1 1", "a m white", "a"])


def test_parse_xpm_too_few_rows():
    with pytest.raises(XpmError):
        parse_xpm(["1 2 1 1", "a c red", "a"])


def test_parse_xpm_text_matches_lines():
    assert parse_xpm_text(SAMPLE_FILE) == parse_xpm(SAMPLE_LINES)


def test_load_xpm_reads_file(tmp_path):
    path = tmp_path / "sample.xpm"
    path.write_text(SAMPLE_FILE)
    assert load_xpm(path) == parse_xpm(SAMPLE_LINES)


def test_load_xpm_missing_file(tmp_path):
    with pytest.raises(XpmError):
        load_xpm(tmp_path / "absent.xpm")


def test_to_bytes_byte_orders_round_trip():
    image = parse_xpm(SAMPLE_LINES)
    little = image.to_bytes(4, False)
    big = image.to_bytes(4, True)
    assert len(little) == image.width * image.height * 4
    little_values = tuple(
        int.from_bytes(little[i : i + 4], "little") for i in range(0, len(little), 4)
    )
    big_values = tuple(
        int.from_bytes(big[i : i + 4], "big") for i in range(0, len(big), 4)
    )
    assert little_values == image.pixels
    assert big_values == image.pixels


def test_to_bytes_rejects_zero_width():
    with pytest.raises(ValueError):
        XpmImage(1, 1, (0,)).to_bytes(0, False)


def test_pixel_out_of_range():
    image = parse_xpm(SAMPLE_LINES)
    with pytest.raises(IndexError):
        image.pixel(2, 0)