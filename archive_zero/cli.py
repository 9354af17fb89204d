import argparse
import asyncio
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

if __package__ is None and __name__ == "__main__":
    sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from archive_zero import __version__
from archive_zero.config_loader import ensure_dirs, load_config, no_delay
from archive_zero.credentials import console_credentials
from archive_zero.dispatcher import CommandDispatcher
from archive_zero.input_controller import InputController
from archive_zero.log_utils import setup_logger
from archive_zero.schemas import OutputLine
from archive_zero.state_manager import new_state
from archive_zero.terminal_ui import render_lines

_CLI_LOGGER = None


def _get_cli_logger(cfg: Dict[str, Any]) -> logging.Logger:
    global _CLI_LOGGER
    if _CLI_LOGGER:
        return _CLI_LOGGER
    logs_dir = Path(cfg.get("data_paths", {}).get("logs", "logs"))
    _CLI_LOGGER = setup_logger(logs_dir / "archive_zero.log", name="archive_zero.cli")
    return _CLI_LOGGER


def read_script(args: argparse.Namespace) -> List[str]:
    if args.stdin:
        return [ln for ln in sys.stdin.read().splitlines() if ln.strip()]
    return [c for c in (args.commands or []) if c.strip()]


def cmd_run(cfg: Dict[str, Any], lines: List[str], as_json: bool = False) -> int:
    """Feed command lines through a fresh session, non-interactively."""
    from rich.console import Console
    console = Console()
    theme = cfg.get("theme", {})
    state = new_state(cfg, logger=_get_cli_logger(cfg), credentials=console_credentials(console))
    controller = InputController(CommandDispatcher(state))

    def _print(line: Optional[OutputLine]) -> None:
        shown = [line] if line is not None else state.sink.lines
        console.print(render_lines(shown, theme))

    if not as_json:
        _print(None)
        state.sink.subscribe(_print)

    async def _go() -> None:
        for raw in lines:
            await controller.submit(raw)
        await state.navigator.drain()

    asyncio.run(_go())
    if as_json:
        payload = {
            "lines": [line.model_dump() for line in state.sink.lines],
            "navigation": list(state.navigator.requests),
        }
        print(json.dumps(payload, ensure_ascii=False))
    return 0


def cmd_shell(cfg: Dict[str, Any]) -> int:
    from archive_zero.shell import run_shell
    return run_shell(cfg, logger=_get_cli_logger(cfg))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="ARCHIVE-ZER0 terminal")
    parser.add_argument("--version", action="store_true", help="Print version and exit")
    parser.add_argument("--config", default="config/local.yaml", help="YAML config path")
    parser.add_argument("--no-delay", action="store_true", help="Skip all simulated delays")
    sub = parser.add_subparsers(dest="command", required=False)

    p_shell = sub.add_parser("shell", help="Start the interactive terminal")
    p_shell.set_defaults(func=lambda cfg, args: cmd_shell(cfg))

    p_run = sub.add_parser("run", help="Run command lines non-interactively")
    p_run.add_argument("commands", nargs="*", help="Command lines, one per argument (or use --stdin)")
    p_run.add_argument("--stdin", action="store_true", help="Read command lines from stdin")
    p_run.add_argument("--json", action="store_true", help="Emit JSON output")
    p_run.set_defaults(func=lambda cfg, args: cmd_run(cfg, read_script(args), as_json=args.json))

    return parser


def main(argv: List[str] = None) -> int:
    parser = build_parser()
    if argv is None:
        argv = sys.argv[1:]
    if "--version" in argv:
        print(__version__)
        return 0
    args = parser.parse_args(argv)
    cfg = load_config(Path(args.config))
    if args.no_delay:
        cfg = no_delay(cfg)
    ensure_dirs(cfg)
    if not getattr(args, "command", None):
        return cmd_shell(cfg)
    try:
        _get_cli_logger(cfg).info("cli_command %s", args.command)
        return args.func(cfg, args)
    except Exception as e:
        _get_cli_logger(cfg).exception("cli_exception %s", args.command)
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
