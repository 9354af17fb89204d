import html
import re

from archive_zero.schemas import OutputLine

ANSI_RE = re.compile(r"\x1b\[[0-?]*[ -/]*[@-~]|\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)|\x1b[@-_]")
CONTROL_RE = re.compile(r"[\x00-\x08\x0b-\x1f\x7f-\x9f]")


def plain_text(text: str) -> str:
    """Strip terminal escape sequences and control characters from text."""
    if not text:
        return ""
    return CONTROL_RE.sub("", ANSI_RE.sub("", text))


def to_html(line: OutputLine) -> str:
    body = html.escape(line.text)
    if line.style:
        body = f'<span class="{line.style}">{body}</span>'
    return f"<p>{body}</p>"
