from typing import Dict, Iterable, List, Optional, Sequence

from rich.text import Text

from archive_zero.commands import build_commands
from archive_zero.config_loader import DEFAULT_CONFIG
from archive_zero.sanitize import plain_text
from archive_zero.schemas import OutputLine


def get_command_names() -> List[str]:
    return [cmd.name for cmd in build_commands()]


def get_command_descriptions() -> Dict[str, str]:
    return {cmd.label: cmd.summary for cmd in build_commands()}


def autocomplete(text: str, names: Optional[Sequence[str]] = None) -> str:
    """First command name (in declared order) starting with text, else text."""
    if not text:
        return text
    for name in names if names is not None else get_command_names():
        if name.startswith(text):
            return name
    return text


def render_lines(lines: Iterable[OutputLine], theme: Optional[Dict[str, str]] = None) -> Text:
    theme = theme or DEFAULT_CONFIG["theme"]
    out = Text()
    for idx, line in enumerate(lines):
        if idx:
            out.append("\n")
        out.append(plain_text(line.text), style=theme.get(line.style, ""))
    return out
