import asyncio
from typing import Coroutine, Optional, Sequence, Tuple

from archive_zero.dispatcher import CommandDispatcher
from archive_zero.history import ReverseSearch
from archive_zero.terminal_ui import autocomplete

ENTER = "ENTER"
UP = "UP"
DOWN = "DOWN"
LEFT = "LEFT"
RIGHT = "RIGHT"
TAB = "TAB"
ESC = "ESC"
BACKSPACE = "BACKSPACE"
CTRL_C = "CTRL_C"
CTRL_D = "CTRL_D"
CTRL_G = "CTRL_G"
CTRL_L = "CTRL_L"
CTRL_R = "CTRL_R"
CTRL_U = "CTRL_U"
CTRL_W = "CTRL_W"


def _printable(key: str) -> bool:
    return len(key) == 1 and key.isprintable()


class InputController:
    """Turns key presses into edits of the input line, history recall and submits.

    handle_key() returns a coroutine when a line was submitted; the caller
    decides whether to await it or run it as a task.
    """

    def __init__(self, dispatcher: CommandDispatcher, command_names: Optional[Sequence[str]] = None) -> None:
        self.dispatcher = dispatcher
        self.state = dispatcher.state
        self.buffer = ""
        self.focused = True
        self.search = ReverseSearch(self.state.history)
        self.command_names = list(command_names) if command_names is not None else dispatcher.names()
        self._prompt_label = ""
        self._prompt_secret = False
        self._prompt_future: Optional[asyncio.Future] = None
        self._saved_buffer = ""

    # --- out-of-band prompts (login) ---

    @property
    def prompting(self) -> bool:
        return self._prompt_future is not None

    async def ask(self, label: str, secret: bool = False) -> str:
        fut = asyncio.get_running_loop().create_future()
        self._saved_buffer, self.buffer = self.buffer, ""
        self._prompt_label, self._prompt_secret, self._prompt_future = label, secret, fut
        try:
            return await fut
        finally:
            if self._prompt_future is fut:
                self._prompt_future = None
                self.buffer = self._saved_buffer

    async def request_credentials(self) -> Tuple[str, str]:
        user = await self.ask("Username: ")
        password = await self.ask("Password: ", secret=True)
        return user, password

    def _answer_prompt(self, value: str) -> None:
        fut = self._prompt_future
        self._prompt_future = None
        self.buffer = self._saved_buffer
        if fut is not None and not fut.done():
            fut.set_result(value)

    def _prompt_key(self, key: str) -> None:
        if key == ENTER:
            self._answer_prompt(self.buffer)
        elif key in (ESC, CTRL_G, CTRL_C):
            self._answer_prompt("")
        elif key == BACKSPACE:
            self.buffer = self.buffer[:-1]
        elif key == CTRL_U:
            self.buffer = ""
        elif _printable(key):
            self.buffer += key

    # --- reverse search ---

    def _search_key(self, key: str) -> None:
        if key == ENTER:
            match = self.search.accept()
            if match:
                self.buffer = match
        elif key in (ESC, CTRL_G, CTRL_C):
            self.search.cancel()
        elif key == BACKSPACE:
            self.search.backspace()
        elif _printable(key):
            self.search.type(key)

    # --- keys ---

    def handle_global_key(self, key: str) -> bool:
        """Page-level keys; '/' pulls focus back to the input."""
        if key == "/" and not self.focused:
            self.focused = True
            return True
        return False

    def handle_key(self, key: str) -> Optional[Coroutine]:
        if self.handle_global_key(key) or not self.focused:
            return None
        if self.prompting:
            self._prompt_key(key)
            return None
        if self.search.active:
            self._search_key(key)
            return None
        if key == ENTER:
            raw, self.buffer = self.buffer, ""
            if not raw.strip():
                return None
            return self.submit(raw)
        if key == UP:
            recalled = self.state.history.previous()
            if recalled is not None:
                self.buffer = recalled
        elif key == DOWN:
            self.buffer = self.state.history.next()
        elif key == TAB:
            self.buffer = autocomplete(self.buffer, self.command_names)
        elif key == CTRL_R:
            self.search.start()
        elif key == BACKSPACE:
            self.buffer = self.buffer[:-1]
        elif key == CTRL_U:
            self.buffer = ""
        elif key == CTRL_W:
            trimmed = self.buffer.rstrip()
            self.buffer = trimmed[: trimmed.rfind(" ") + 1]
        elif key == CTRL_L:
            self.state.sink.reset()
        elif key in (ESC, CTRL_G):
            self.focused = False
        elif _printable(key):
            self.buffer += key
        return None

    async def submit(self, raw: str) -> bool:
        raw = raw.strip()
        if not raw:
            return False
        self.state.sink.write(f"> {raw}")
        self.state.history.append(raw)
        return await self.dispatcher.dispatch(raw)

    def prompt_line(self) -> str:
        if self.prompting:
            shown = "*" * len(self.buffer) if self._prompt_secret else self.buffer
            return f"{self._prompt_label}{shown}"
        if self.search.active:
            st = self.search.state
            return f"(reverse-i-search)`{st.query}': {st.best_match}"
        if not self.focused:
            return "(press / to focus)"
        return f"> {self.buffer}"
