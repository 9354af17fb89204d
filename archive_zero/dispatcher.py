from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, Iterable, List, Optional

from archive_zero.command_utils import normalize_command, parse_command_parts
from archive_zero.log_utils import log_event
from archive_zero.state_manager import InterpreterState

Handler = Callable[[InterpreterState, List[str], str], Awaitable[None]]

CLEARANCE_ERROR = "[ERROR] Command restricted: insufficient clearance."
LOCKOUT_ALERT = "[ALERT] Login system temporarily disabled."
UNKNOWN_COMMAND = "Unknown command."
COMMAND_FAILED = "[ERROR] Command failed."


@dataclass
class Command:
    name: str
    handler: Handler
    summary: str = ""
    usage: str = ""
    min_args: int = 0
    takes_args: bool = False
    dev_only: bool = False

    @property
    def label(self) -> str:
        return self.usage or self.name


class CommandDispatcher:
    """Routes one submitted line to its handler.

    Handlers get (state, args, raw) where args are the tokens after the command
    word of the normalized line and raw is the line as typed.
    """

    def __init__(self, state: InterpreterState, commands: Optional[Iterable[Command]] = None) -> None:
        self.state = state
        self.commands: Dict[str, Command] = {}
        if commands is None:
            from archive_zero.commands import build_commands
            commands = build_commands()
        for cmd in commands:
            self.register(cmd)

    def register(self, cmd: Command) -> None:
        self.commands[cmd.name] = cmd

    def names(self) -> List[str]:
        return list(self.commands)

    async def dispatch(self, raw: str) -> bool:
        st = self.state
        line = normalize_command(raw)
        parts = parse_command_parts(line)
        if not parts:
            return False
        name, args = parts[0], parts[1:]
        if name == "login" and st.session.login_disabled:
            log_event(st.logger, "login_blocked")
            st.sink.write(LOCKOUT_ALERT, "error")
            return False
        cmd = self.commands.get(name)
        if cmd is None or (args and not cmd.takes_args):
            log_event(st.logger, "unknown_command %s", name)
            st.sink.write(UNKNOWN_COMMAND, "error")
            return False
        if cmd.dev_only and not st.session.dev_mode:
            log_event(st.logger, "clearance_denied %s", name)
            st.sink.write(CLEARANCE_ERROR, "error")
            return False
        if len(args) < cmd.min_args:
            st.sink.write(f"Usage: {cmd.usage}")
            return False
        log_event(st.logger, "command %s", name)
        try:
            await cmd.handler(st, args, raw.strip())
        except Exception as exc:
            st.logger.exception("command_failed %s", name)
            st.sink.write(f"{COMMAND_FAILED} ({exc})", "error")
            return False
        return True
