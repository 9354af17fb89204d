from archive_zero.command_utils import (
    normalize_command,
    normalize_sector,
    normalize_target,
    parse_command_parts,
    remainder,
)


def test_parse_command_parts_drops_empty_tokens():
    assert parse_command_parts("  scan    7 ") == ["scan", "7"]
    assert parse_command_parts("") == []


def test_normalize_command():
    assert normalize_command("  TRACE Z-001 ") == "trace z-001"


def test_normalize_sector():
    assert normalize_sector("7") == "07"
    assert normalize_sector("07") == "07"
    assert normalize_sector("007") == "07"
    assert normalize_sector("12") == "12"
    assert normalize_sector("100") is None
    assert normalize_sector("ab") is None
    assert normalize_sector("-1") is None


def test_normalize_target():
    assert normalize_target("z-001") == "Z-001"


def test_remainder_is_text_after_first_space():
    assert remainder("echo hello world") == "hello world"
    assert remainder("echo  two  spaces") == " two  spaces"
    assert remainder("echo") == ""


def test_normalize_sector_rejects_non_ascii_digits():
    assert normalize_sector("²") is None
    assert normalize_sector("٣") is None
    assert normalize_sector("0⁵") is None


def test_remainder_splits_on_any_whitespace():
    assert remainder("echo\thello") == "hello"
    assert remainder("echo\thello world") == "hello world"
