import pytest

from rwtxd.ini import MAX_LINE, MAX_SECTION, IniReader, parse_ini, parse_ini_file

SAMPLE = (
    "; leading comment\n"
    "[Texture]\n"
    "Name = wheel ; trailing comment\n"
    "Width = 0x4D2\n"
    "Scale: 2.5\n"
    "# hash comment\n"
    "Enabled = YES\n"
)


def test_parse_entries():
    result = parse_ini(SAMPLE)
    assert result.error == 0
    assert result.ok
    assert result.entries == [
        ("Texture", "Name", "wheel"),
        ("Texture", "Width", "0x4D2"),
        ("Texture", "Scale", "2.5"),
        ("Texture", "Enabled", "YES"),
    ]


def test_lookup_is_case_insensitive():
    reader = IniReader.from_lines(SAMPLE)
    assert reader.parse_error() == 0
    assert reader.get("TEXTURE", "name", "") == "wheel"


def test_missing_value_gives_default():
    reader = IniReader.from_lines(SAMPLE)
    assert reader.get("Texture", "Height", "none") == "none"


def test_semicolon_without_whitespace_is_kept():
    reader = IniReader.from_lines("a=b;c\nd = e\t; note\n")
    assert reader.get("", "a", None) == "b;c"
    assert reader.get("", "d", None) == "e"


def test_continuation_lines_join_values():
    text = "[s]\na = one\n  two\n"
    assert parse_ini(text).entries[-1] == ("s", "a", "two")
    assert IniReader.from_lines(text).get("s", "a", None) == "one\ntwo"


def test_indented_line_without_previous_name_is_a_pair():
    reader = IniReader.from_lines("  x = 1\n[t]\n  b = 2\n")
    assert reader.get("", "x", None) == "1"
    assert reader.get("t", "b", None) == "2"


def test_duplicate_names_are_joined():
    reader = IniReader.from_lines("a=1\na=2\n")
    assert reader.get("", "a", None) == "1\n2"


def test_empty_first_value_is_not_joined_with_newline():
    reader = IniReader.from_lines("a=\na=2\n")
    assert reader.get("", "a", None) == "2"


def test_first_error_line_is_kept_and_parsing_continues():
    result = parse_ini("[broken\nk=v\nnoequals\n")
    assert result.error == 1
    assert result.entries == [("", "k", "v")]


def test_missing_separator_reports_line():
    assert parse_ini("k=v\nnoequals\n").error == 2


def test_comment_inside_section_header_is_error():
    assert parse_ini("[s ; x]\n").error == 1


def test_bom_is_skipped():
    reader = IniReader.from_lines("\ufeffk=v\n")
    assert reader.get("", "k", None) == "v"


def test_long_section_name_is_truncated():
    name = "s" * 60
    reader = IniReader.from_lines("[" + name + "]\nk=v\n")
    assert reader.get(name[:MAX_SECTION - 1], "k", None) == "v"
    assert reader.get(name, "k", None) is None


def test_long_lines_are_split():
    result = parse_ini("k=" + "v" * 300 + "\n")
    assert result.entries[0] == ("", "k", "v" * (MAX_LINE - 1 - len("k=")))
    assert result.error == 2


@pytest.mark.parametrize(
    "text, expected",
    [("1234", 1234), ("0x4D2", 1234), ("-1234", -1234), ("  1234", 1234), ("1234abc", 1234)],
)
def test_get_integer(text, expected):
    reader = IniReader.from_lines(f"n={text}\n")
    assert reader.get_integer("", "n", -1) == expected


@pytest.mark.parametrize("text", ["abc", ""])
def test_get_integer_default(text):
    reader = IniReader.from_lines(f"n={text}\n")
    assert reader.get_integer("", "n", -7) == -7


@pytest.mark.parametrize("text, expected", [("2.5", 2.5), ("-0.5", -0.5), (" 3", 3.0)])
def test_get_real(text, expected):
    reader = IniReader.from_lines(f"r={text}\n")
    assert reader.get_real("", "r", 0.0) == expected


def test_get_real_default():
    reader = IniReader.from_lines("r=abc\n")
    assert reader.get_real("", "r", 9.5) == 9.5


@pytest.mark.parametrize("word", ["true", "YES", "On", "1"])
def test_get_boolean_true(word):
    reader = IniReader.from_lines(f"b={word}\n")
    assert reader.get_boolean("", "b", False) is True


@pytest.mark.parametrize("word", ["false", "No", "OFF", "0"])
def test_get_boolean_false(word):
    reader = IniReader.from_lines(f"b={word}\n")
    assert reader.get_boolean("", "b", True) is False


def test_get_boolean_default():
    reader = IniReader.from_lines("b=maybe\n")
    assert reader.get_boolean("", "b", True) is True


def test_reads_file(tmp_path):
    path = tmp_path / "settings.ini"
    path.write_text(SAMPLE, encoding="utf-8")
    assert parse_ini_file(path).error == 0
    reader = IniReader(str(path))
    assert reader.get_integer("texture", "width", 0) == 1234
    assert reader.get_boolean("texture", "enabled", False) is True


def test_missing_file(tmp_path):
    missing = tmp_path / "missing.ini"
    assert IniReader(missing).parse_error() == -1
    with pytest.raises(OSError):
        parse_ini_file(missing)