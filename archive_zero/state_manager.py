import copy
import datetime
import functools
import logging
import random
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from archive_zero.config_loader import DEFAULT_CONFIG
from archive_zero.credentials import CredentialPrompt
from archive_zero.history import CommandHistory
from archive_zero.log_utils import null_logger
from archive_zero.navigation import Navigator
from archive_zero.output_sink import OutputSink
from archive_zero.probes import resource_exists
from archive_zero.registry import TargetRegistry, archive_ids


def utc_now() -> datetime.datetime:
    return datetime.datetime.now(datetime.UTC)


@dataclass
class Session:
    dev_mode: bool = False
    login_attempts: int = 0
    login_disabled: bool = False
    active_trace: bool = False


async def _no_credentials():
    return "", ""


@dataclass
class InterpreterState:
    """Everything one terminal session reads or mutates. Nothing outlives it."""

    cfg: Dict[str, Any]
    sink: OutputSink
    registry: TargetRegistry
    navigator: Navigator
    session: Session = field(default_factory=Session)
    history: CommandHistory = field(default_factory=CommandHistory)
    probe: Callable[[str], bool] = resource_exists
    credentials: CredentialPrompt = _no_credentials
    rng: random.Random = field(default_factory=random.Random)
    clock: Callable[[], datetime.datetime] = utc_now
    logger: logging.Logger = field(default_factory=null_logger)

    def delay(self, name: str) -> float:
        return float((self.cfg.get("delays") or {}).get(name, 0) or 0)

    @property
    def sectors(self) -> List[str]:
        return list(self.cfg.get("sectors") or DEFAULT_CONFIG["sectors"])

    @property
    def scanners(self) -> List[str]:
        return list(self.cfg.get("scanners") or DEFAULT_CONFIG["scanners"])


def new_state(cfg: Optional[Dict[str, Any]] = None, logger: Optional[logging.Logger] = None, **overrides: Any) -> InterpreterState:
    cfg = cfg if cfg is not None else copy.deepcopy(DEFAULT_CONFIG)
    logger = logger or null_logger()
    arch = cfg.get("archives") or DEFAULT_CONFIG["archives"]
    known = archive_ids(int(arch.get("count", 10)), arch.get("prefix", "Z-"))
    overrides.setdefault("sink", OutputSink(cfg.get("banner") or DEFAULT_CONFIG["banner"]))
    overrides.setdefault("registry", TargetRegistry(known))
    overrides.setdefault("navigator", Navigator(base=str(arch.get("base", ".")), logger=logger))
    overrides.setdefault("probe", functools.partial(resource_exists, timeout=float(cfg.get("probe_timeout", 2.0))))
    return InterpreterState(cfg=cfg, logger=logger, **overrides)
