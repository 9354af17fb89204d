import asyncio
import datetime
from email.utils import format_datetime
from typing import List

from archive_zero.command_utils import normalize_sector, normalize_target, remainder
from archive_zero.dispatcher import Command
from archive_zero.log_utils import log_event
from archive_zero.navigation import resolve_location
from archive_zero.probes import probe_resources
from archive_zero.state_manager import InterpreterState

PROGRESS_FILLED = "▓"
PROGRESS_EMPTY = "░"


def utc_string(ts: datetime.datetime) -> str:
    """Render like a browser's Date.toUTCString(): 'Mon, 19 Oct 2026 20:38:00 GMT'."""
    return format_datetime(ts.astimezone(datetime.timezone.utc), usegmt=True)


def archive_page(target: str) -> str:
    return f"{target.lower()}.html"


def progress_line(target: str, step: int, total: int) -> str:
    bar = PROGRESS_FILLED * step + PROGRESS_EMPTY * (total - step)
    return f"Tracing {target} [{bar}] {step * 100 // total}%"


def _open_archive(st: InterpreterState, target: str) -> None:
    st.sink.write(f"Opening {target}...")
    st.navigator.schedule(archive_page(target), st.delay("navigate"))


# --- public commands ---

async def cmd_help(st: InterpreterState, args: List[str], raw: str) -> None:
    commands = build_commands()
    st.sink.write("Available commands:")
    for cmd in commands:
        if not cmd.dev_only:
            st.sink.write(f"  {cmd.label} - {cmd.summary}")
    if st.session.dev_mode:
        st.sink.write("Developer Commands:")
        for cmd in commands:
            if cmd.dev_only:
                st.sink.write(f"  {cmd.label} - {cmd.summary}")


async def cmd_clear(st: InterpreterState, args: List[str], raw: str) -> None:
    st.sink.reset()


async def cmd_archives(st: InterpreterState, args: List[str], raw: str) -> None:
    st.sink.write("ARCHIVE FILES SUMMARY:")
    for target in st.registry.known_archives:
        st.sink.write(target)


async def cmd_view(st: InterpreterState, args: List[str], raw: str) -> None:
    target = normalize_target(args[0])
    if not st.registry.is_known(target):
        st.sink.write(f"[ERROR] Archive {target} not found.", "error")
        return
    _open_archive(st, target)


async def cmd_random(st: InterpreterState, args: List[str], raw: str) -> None:
    base = str(st.cfg.get("archives", {}).get("base", "."))
    by_location = {resolve_location(base, archive_page(t)): t for t in st.registry.known_archives}
    found = await probe_resources(list(by_location), check=st.probe, logger=st.logger)
    if not found:
        st.sink.write("[ERROR] No accessible anomalies found.", "error")
        return
    _open_archive(st, by_location[st.rng.choice(found)])


async def cmd_report(st: InterpreterState, args: List[str], raw: str) -> None:
    st.sink.write("No active reports found.")


async def cmd_create(st: InterpreterState, args: List[str], raw: str) -> None:
    st.sink.write("=== Field Report Creation ===")
    st.sink.write("Title> _ (Not implemented in this demo)", "warning")


async def cmd_scan(st: InterpreterState, args: List[str], raw: str) -> None:
    sector = normalize_sector(args[0])
    if sector is None:
        st.sink.write(f"[ERROR] Invalid sector: {args[0].upper()}", "error")
        return
    st.sink.write(f"Initiating scan on {sector}...")
    await asyncio.sleep(st.delay("scan"))
    found = st.registry.targets_in(sector)
    if not found:
        st.sink.write(f"[SCAN COMPLETE] No anomalies detected in {sector}.")
        return
    st.sink.write(f"[SCAN COMPLETE] Detected {len(found)} object(s) in {sector}:")
    for target in found:
        rec = st.registry.record(target)
        if rec:
            st.sink.write(f" - {target} (last traced on {rec.scanner} scanners at {utc_string(rec.timestamp)})")
        else:
            st.sink.write(f" - {target} (unknown metadata)")


async def cmd_decrypt(st: InterpreterState, args: List[str], raw: str) -> None:
    target = normalize_target(args[0])
    st.sink.write(f"[DECRYPT] Attempting to unlock {target}...")
    await asyncio.sleep(st.delay("decrypt"))
    st.sink.write(f"[ERROR] File {target} is locked with level-4 clearance.", "error")


async def cmd_status(st: InterpreterState, args: List[str], raw: str) -> None:
    st.sink.write("HQ STATUS:")
    st.sink.write(f"Active anomalies: {st.registry.target_count()}")
    st.sink.write("Pending reports: 2")
    st.sink.write("New alerts: 1 (Crimson)")
    st.sink.write("System Integrity: STABLE")


async def cmd_alerts(st: InterpreterState, args: List[str], raw: str) -> None:
    st.sink.write("[ALERT] Z-003 activity spike detected in SEC-07", "error")


async def cmd_time(st: InterpreterState, args: List[str], raw: str) -> None:
    st.sink.write(f"Current system time: {utc_string(st.clock())}")


async def cmd_system(st: InterpreterState, args: List[str], raw: str) -> None:
    st.sink.write("ARCHIVE-ZER0 SYSTEM INFO:")
    st.sink.write("OS Build: A0-Terminal v0.3")
    st.sink.write("Database: Connected")
    st.sink.write("Security Layer: Active")
    st.sink.write("Network Sync: Stable")


async def cmd_echo(st: InterpreterState, args: List[str], raw: str) -> None:
    st.sink.write(remainder(raw))


async def cmd_trace(st: InterpreterState, args: List[str], raw: str) -> None:
    target = normalize_target(args[0])
    if not st.registry.is_known(target):
        st.sink.write(f"[ERROR] Target {target} not found.", "error")
        return
    if st.session.active_trace:
        st.sink.write("[ERROR] Trace already in progress.", "error")
        return
    st.session.active_trace = True
    try:
        log_event(st.logger, "trace_start %s", target)
        total = int(st.cfg.get("trace_steps", 10))
        for step in range(1, total + 1):
            st.sink.write(progress_line(target, step, total))
            await asyncio.sleep(st.delay("trace_step"))
        sector = st.rng.choice(st.sectors)
        scanner = st.rng.choice(st.scanners)
        st.registry.move(target, sector, scanner, st.clock())
        log_event(st.logger, "trace_done %s sector=%s scanner=%s", target, sector, scanner)
        st.sink.write(f"[TRACE COMPLETE] {target} last detected near Sector-{sector} on {scanner} scanners.")
    finally:
        st.session.active_trace = False


async def cmd_login(st: InterpreterState, args: List[str], raw: str) -> None:
    creds = st.cfg.get("login", {})
    user, password = await st.credentials()
    if user == creds.get("username") and password == creds.get("password"):
        st.session.dev_mode = True
        log_event(st.logger, "login_ok")
        st.sink.write("[ACCESS GRANTED] Developer clearance active.", "success")
        return
    st.session.login_attempts += 1
    log_event(st.logger, "login_failed attempts=%d", st.session.login_attempts)
    st.sink.write("[ACCESS DENIED] Invalid credentials.", "error")
    if st.session.login_attempts >= int(creds.get("max_attempts", 3)):
        st.session.login_disabled = True
        log_event(st.logger, "login_locked")
        st.sink.write("[HQ ALERT] Multiple failed login attempts detected.", "error")
        st.sink.write("Login command disabled for this session.", "warning")


async def cmd_home(st: InterpreterState, args: List[str], raw: str) -> None:
    st.sink.write("Returning to home directory...")
    home = str(st.cfg.get("archives", {}).get("home_page", "index.html"))
    st.navigator.schedule(home, st.delay("home"))


# --- developer commands ---

async def cmd_dev_stub(st: InterpreterState, args: List[str], raw: str) -> None:
    verb = raw.split()[0].upper()
    st.sink.write(f"[DEV] {verb} command executed for {normalize_target(args[0])}.", "success")


async def cmd_sectors(st: InterpreterState, args: List[str], raw: str) -> None:
    st.sink.write("KNOWN SECTORS (occupied):")
    sectors = st.registry.occupied_sectors()
    if not sectors:
        st.sink.write(" - No sectors currently indexed.")
        return
    for sector in sectors:
        for target in st.registry.targets_in(sector):
            rec = st.registry.record(target)
            st.sink.write(f"Sector-{sector}: {target} (scanner: {rec.scanner}, traced: {utc_string(rec.timestamp)})")


async def cmd_relocate(st: InterpreterState, args: List[str], raw: str) -> None:
    target = normalize_target(args[0])
    sector = normalize_sector(args[1])
    if not st.registry.is_known(target):
        st.sink.write(f"[ERROR] Target {target} not found.", "error")
        return
    if sector is None:
        st.sink.write(f"[ERROR] Invalid sector: {args[1].upper()}", "error")
        return
    st.registry.move(target, sector, "manual", st.clock())
    log_event(st.logger, "relocate %s sector=%s", target, sector)
    st.sink.write(f"[DEV] {target} relocated to Sector-{sector}.", "success")


def build_commands() -> List[Command]:
    """The command table, in help and autocomplete order."""
    return [
        Command("help", cmd_help, "show available commands"),
        Command("clear", cmd_clear, "clear terminal"),
        Command("archives", cmd_archives, "show archive summaries"),
        Command("view", cmd_view, "open archive/log", usage="view <ID>", min_args=1, takes_args=True),
        Command("random", cmd_random, "open a random entity"),
        Command("scan", cmd_scan, "simulate sector scan", usage="scan <sector>", min_args=1, takes_args=True),
        Command("trace", cmd_trace, "trace anomaly", usage="trace <target>", min_args=1, takes_args=True),
        Command("decrypt", cmd_decrypt, "attempt decrypt", usage="decrypt <ID>", min_args=1, takes_args=True),
        Command("status", cmd_status, "show HQ/terminal status"),
        Command("alerts", cmd_alerts, "list active alerts"),
        Command("time", cmd_time, "show in-universe time"),
        Command("system", cmd_system, "show active status"),
        Command("echo", cmd_echo, "output message", usage="echo <msg>", min_args=1, takes_args=True),
        Command("create", cmd_create, "create new field report"),
        Command("report", cmd_report, "list submitted reports"),
        Command("login", cmd_login, "authenticate"),
        Command("home", cmd_home, "return to home page"),
        Command("add", cmd_dev_stub, "add new archive", usage="add <ID>", min_args=1, takes_args=True, dev_only=True),
        Command("remove", cmd_dev_stub, "remove archive", usage="remove <ID>", min_args=1, takes_args=True, dev_only=True),
        Command("lock", cmd_dev_stub, "lock file", usage="lock <ID>", min_args=1, takes_args=True, dev_only=True),
        Command("unlock", cmd_dev_stub, "unlock file", usage="unlock <ID>", min_args=1, takes_args=True, dev_only=True),
        Command("sectors", cmd_sectors, "reveal occupied sectors", dev_only=True),
        Command("relocate", cmd_relocate, "move target to new sector", usage="relocate <target> <sector>", min_args=2, takes_args=True, dev_only=True),
    ]
