from typing import Callable, List, Optional, Sequence

from archive_zero.sanitize import to_html
from archive_zero.schemas import OutputLine


class OutputSink:
    """Scrollback buffer. Lines only go away through reset()."""

    def __init__(self, banner: Sequence[str] = ()) -> None:
        self.banner = list(banner)
        self._lines: List[OutputLine] = []
        self._listeners: List[Callable[[Optional[OutputLine]], None]] = []
        self.reset()

    @property
    def lines(self) -> List[OutputLine]:
        return list(self._lines)

    def texts(self) -> List[str]:
        return [line.text for line in self._lines]

    def subscribe(self, callback: Callable[[Optional[OutputLine]], None]) -> None:
        """callback(line) per write; callback(None) after a reset."""
        self._listeners.append(callback)

    def _notify(self, line: Optional[OutputLine]) -> None:
        for cb in self._listeners:
            cb(line)

    def write(self, text: str, style: str = "") -> OutputLine:
        line = OutputLine(text=text, style=style)
        self._lines.append(line)
        self._notify(line)
        return line

    def reset(self) -> None:
        self._lines = [OutputLine(text=t) for t in self.banner]
        self._notify(None)

    def tail(self, n: int) -> List[OutputLine]:
        if n <= 0:
            return []
        return self._lines[-n:]

    def to_html(self) -> str:
        return "\n".join(to_html(line) for line in self._lines)
