import asyncio
import functools
import os
import webbrowser
from typing import Any, Dict, Optional

from rich.console import Console
from rich.layout import Layout
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from archive_zero import input_controller as keys
from archive_zero.dispatcher import COMMAND_FAILED, CommandDispatcher
from archive_zero.input_controller import InputController
from archive_zero.log_utils import log_event
from archive_zero.navigation import Navigator
from archive_zero.state_manager import InterpreterState, new_state
from archive_zero.terminal_ui import render_lines

_CONTROL_KEYS = {
    "\x03": keys.CTRL_C,
    "\x04": keys.CTRL_D,
    "\x07": keys.CTRL_G,
    "\x08": keys.BACKSPACE,
    "\x0c": keys.CTRL_L,
    "\x12": keys.CTRL_R,
    "\x15": keys.CTRL_U,
    "\x17": keys.CTRL_W,
    "\x7f": keys.BACKSPACE,
}


def _get_key() -> str:
    if os.name == "nt":
        import msvcrt
        ch = msvcrt.getwch()
        if ch in ("\x00", "\xe0"):
            nxt = msvcrt.getwch()
            arrows = {"H": keys.UP, "P": keys.DOWN, "K": keys.LEFT, "M": keys.RIGHT}
            return arrows.get(nxt, "")
        if ch == "\r":
            return keys.ENTER
        if ch == "\t":
            return keys.TAB
        if ch == "\x1b":
            return keys.ESC
        return _CONTROL_KEYS.get(ch, ch)
    import sys
    import termios
    import tty
    fd = sys.stdin.fileno()
    old = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        ch = sys.stdin.read(1)
        if ch == "\x1b":
            seq = sys.stdin.read(2)
            arrows = {"[A": keys.UP, "[B": keys.DOWN, "[C": keys.RIGHT, "[D": keys.LEFT}
            return arrows.get(seq, keys.ESC)
        if ch in ("\r", "\n"):
            return keys.ENTER
        if ch == "\t":
            return keys.TAB
        return _CONTROL_KEYS.get(ch, ch)
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)


def _report_job(state: InterpreterState, task: asyncio.Task) -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is None:
        return
    state.logger.exception("command_task_failed", exc_info=exc)
    state.sink.write(f"{COMMAND_FAILED} ({exc})", "error")


def _build_layout(state: InterpreterState, controller: InputController, height: int) -> Layout:
    theme = state.cfg.get("theme", {})
    panel_style = theme.get("panel", "cyan")
    banner = (state.cfg.get("banner") or ["ARCHIVE-ZER0"])[0]
    body_rows = max(1, height - 8)
    layout = Layout()
    layout.split_column(
        Layout(Panel(Text(banner), style=panel_style), name="header", size=3),
        Layout(Panel(render_lines(state.sink.tail(body_rows), theme), title="Terminal", style=panel_style), name="body", ratio=1),
        Layout(Panel(Text(controller.prompt_line()), style=panel_style), name="footer", size=3),
    )
    return layout


async def _shell_loop(state: InterpreterState, console: Console) -> None:
    controller = InputController(CommandDispatcher(state))
    state.credentials = controller.request_credentials
    loop = asyncio.get_running_loop()
    jobs = set()

    def _render() -> Layout:
        return _build_layout(state, controller, console.size.height)

    with Live(_render(), console=console, refresh_per_second=10, screen=True) as live:

        async def _refresh() -> None:
            while True:
                live.update(_render())
                await asyncio.sleep(0.05)

        refresher = loop.create_task(_refresh())
        try:
            while True:
                key = await loop.run_in_executor(None, _get_key)
                if key == keys.CTRL_D or (key == keys.CTRL_C and not controller.prompting and not controller.search.active):
                    break
                job = controller.handle_key(key)
                if job is not None:
                    task = loop.create_task(job)
                    jobs.add(task)
                    task.add_done_callback(jobs.discard)
                    task.add_done_callback(functools.partial(_report_job, state))
                live.update(_render())
        finally:
            refresher.cancel()
    log_event(state.logger, "shell_exit commands=%d", len(state.history))


def run_shell(cfg: Dict[str, Any], logger: Optional[Any] = None) -> int:
    console = Console()
    arch = cfg.get("archives", {})
    opener = webbrowser.open if cfg.get("open_browser") else None
    state = new_state(cfg, logger=logger, navigator=Navigator(base=str(arch.get("base", ".")), opener=opener, logger=logger))
    log_event(state.logger, "shell_start")
    asyncio.run(_shell_loop(state, console))
    return 0
