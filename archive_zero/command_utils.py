import re
from typing import List, Optional

SECTOR_RE = re.compile(r"[0-9]{1,3}")
FIRST_SPACE_RE = re.compile(r"\s")


def parse_command_parts(line: str) -> List[str]:
    return (line or "").split()


def normalize_command(raw: str) -> str:
    return (raw or "").strip().lower()


def normalize_target(token: str) -> str:
    return (token or "").strip().upper()


def normalize_sector(token: str) -> Optional[str]:
    """Map "7", "07" or "007" to the sector code "07"; None when not a sector."""
    token = (token or "").strip()
    if not SECTOR_RE.fullmatch(token):
        return None
    value = int(token)
    if value > 99:
        return None
    return f"{value:02d}"


def remainder(raw: str) -> str:
    """Text after the first whitespace character of raw, untouched."""
    parts = FIRST_SPACE_RE.split((raw or "").strip(), maxsplit=1)
    return parts[1] if len(parts) > 1 else ""
