from datetime import datetime
from typing import Dict, Iterable, List, Optional, Set

from archive_zero.schemas import TraceRecord


class RegistryError(Exception):
    pass


def archive_ids(count: int, prefix: str = "Z-") -> List[str]:
    return [f"{prefix}{n:03d}" for n in range(1, count + 1)]


class TargetRegistry:
    """Where each traced target sits and how it was last traced.

    sector_index and trace_log are only ever changed together through move().
    """

    def __init__(self, known_archives: Iterable[str]):
        self.known_archives: List[str] = [a.upper() for a in known_archives]
        self._known: Set[str] = set(self.known_archives)
        self.sector_index: Dict[str, Set[str]] = {}
        self.trace_log: Dict[str, TraceRecord] = {}

    def is_known(self, target: str) -> bool:
        return target.upper() in self._known

    def record(self, target: str) -> Optional[TraceRecord]:
        return self.trace_log.get(target)

    def _index(self, target: str, sector: str) -> None:
        self.sector_index.setdefault(sector, set()).add(target)

    def _unindex(self, target: str, sector: Optional[str]) -> None:
        if not sector:
            return
        members = self.sector_index.get(sector)
        if members is None:
            return
        members.discard(target)
        if not members:
            del self.sector_index[sector]

    def move(self, target: str, sector: str, scanner: str, timestamp: datetime) -> TraceRecord:
        rec = TraceRecord(sector=sector, scanner=scanner, timestamp=timestamp)
        prev = self.trace_log.get(target)
        self._unindex(target, prev.sector if prev else None)
        self.trace_log[target] = rec
        self._index(target, rec.sector)
        return rec

    def targets_in(self, sector: str) -> List[str]:
        return sorted(self.sector_index.get(sector, ()))

    def occupied_sectors(self) -> List[str]:
        return sorted(self.sector_index)

    def target_count(self) -> int:
        return sum(len(v) for v in self.sector_index.values())

    def check_consistency(self) -> None:
        seen: Set[str] = set()
        for sector, members in self.sector_index.items():
            if not members:
                raise RegistryError(f"empty sector entry {sector}")
            for target in members:
                if target in seen:
                    raise RegistryError(f"{target} indexed in more than one sector")
                seen.add(target)
                rec = self.trace_log.get(target)
                if rec is None or rec.sector != sector:
                    raise RegistryError(f"{target} indexed in {sector} but traced elsewhere")
        for target, rec in self.trace_log.items():
            if target not in self.sector_index.get(rec.sector, ()):
                raise RegistryError(f"{target} traced to {rec.sector} but not indexed there")
