from archive_zero.schemas import OutputLine
from archive_zero.terminal_ui import autocomplete, get_command_descriptions, get_command_names, render_lines


def test_command_names_declared_order():
    names = get_command_names()
    assert names[:3] == ["help", "clear", "archives"]
    assert "relocate" in names


def test_autocomplete_first_match_wins():
    names = ["status", "scan", "sectors"]
    assert autocomplete("s", names) == "status"
    assert autocomplete("sc", names) == "scan"
    assert autocomplete("x", names) == "x"
    assert autocomplete("", names) == ""


def test_descriptions_use_usage_labels():
    desc = get_command_descriptions()
    assert desc["scan <sector>"] == "simulate sector scan"


def test_render_lines_keeps_user_text_literal():
    text = render_lines([OutputLine(text="[bold]hi[/bold]\x1b[31m!"), OutputLine(text="bad", style="error")])
    assert text.plain == "[bold]hi[/bold]!\nbad"
