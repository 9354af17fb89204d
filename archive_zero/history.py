from dataclasses import dataclass
from typing import List, Optional


class CommandHistory:
    """Submitted command lines with a recall cursor in [0, len]."""

    def __init__(self) -> None:
        self._entries: List[str] = []
        self.cursor = 0

    @property
    def entries(self) -> List[str]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def append(self, raw: str) -> None:
        if not raw:
            return
        self._entries.append(raw)
        self.reset_cursor()

    def reset_cursor(self) -> None:
        self.cursor = len(self._entries)

    def previous(self) -> Optional[str]:
        if not self._entries:
            return None
        self.cursor = max(0, self.cursor - 1)
        return self._entries[self.cursor]

    def next(self) -> str:
        if self.cursor < len(self._entries) - 1:
            self.cursor += 1
            return self._entries[self.cursor]
        self.reset_cursor()
        return ""


@dataclass
class ReverseSearchState:
    active: bool = False
    query: str = ""
    best_match: str = ""


class ReverseSearch:
    def __init__(self, history: CommandHistory) -> None:
        self.history = history
        self.state = ReverseSearchState()

    @property
    def active(self) -> bool:
        return self.state.active

    def start(self) -> None:
        self.state = ReverseSearchState(active=True)

    def _update(self) -> None:
        self.state.best_match = ""
        if not self.state.query:
            return
        for entry in reversed(self.history.entries):
            if self.state.query in entry:
                self.state.best_match = entry
                return

    def type(self, text: str) -> str:
        self.state.query += text
        self._update()
        return self.state.best_match

    def backspace(self) -> str:
        self.state.query = self.state.query[:-1]
        self._update()
        return self.state.best_match

    def accept(self) -> str:
        match = self.state.best_match
        self.state = ReverseSearchState()
        return match

    def cancel(self) -> None:
        self.state = ReverseSearchState()
