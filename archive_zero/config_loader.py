import copy
from pathlib import Path
from typing import Any, Dict

import yaml


DEFAULT_CONFIG: Dict[str, Any] = {
    "banner": [
        "ARCHIVE-ZER0 SYSTEM v0.3",
        "Type help to view available commands.",
    ],
    "archives": {
        "prefix": "Z-",
        "count": 10,
        "base": ".",  # local directory or http(s) URL holding z-###.html pages
        "home_page": "index.html",
    },
    "sectors": ["01", "02", "03", "04", "05", "06", "07", "08", "09", "10", "11", "12"],
    "scanners": ["thermal", "spectral", "quantum", "neural", "infrared", "gravimetric"],
    "delays": {
        "navigate": 0.8,
        "home": 0.8,
        "scan": 1.2,
        "decrypt": 1.2,
        "trace_step": 0.12,
    },
    "trace_steps": 10,
    "login": {
        "max_attempts": 3,
        "username": "admin",
        "password": "Az19882010@",
    },
    "probe_timeout": 2.0,
    "open_browser": False,
    "data_paths": {
        "logs": "logs",
    },
    "theme": {
        "error": "bold red",
        "warning": "yellow",
        "success": "green",
        "": "white",
        "panel": "cyan",
    },
}


def _merge(base: Dict[str, Any], loaded: Dict[str, Any]) -> Dict[str, Any]:
    cfg = copy.deepcopy(base)
    for key, value in loaded.items():
        if isinstance(value, dict) and isinstance(cfg.get(key), dict):
            cfg[key].update(value)
        else:
            cfg[key] = value
    return cfg


def load_config(path: Path = Path("config/local.yaml")) -> Dict[str, Any]:
    path = Path(path)
    if not path.exists():
        return copy.deepcopy(DEFAULT_CONFIG)
    try:
        with path.open("r", encoding="utf-8") as f:
            loaded = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError):
        return copy.deepcopy(DEFAULT_CONFIG)
    if not isinstance(loaded, dict):
        return copy.deepcopy(DEFAULT_CONFIG)
    return _merge(DEFAULT_CONFIG, loaded)


def no_delay(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Copy of cfg with every delay zeroed (scripted runs and tests)."""
    out = copy.deepcopy(cfg)
    out["delays"] = {k: 0 for k in (cfg.get("delays") or DEFAULT_CONFIG["delays"])}
    return out


def ensure_dirs(cfg: Dict[str, Any]) -> None:
    p = cfg.get("data_paths", {}).get("logs")
    if p:
        Path(p).mkdir(parents=True, exist_ok=True)
