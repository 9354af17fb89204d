import asyncio
import logging
from typing import Callable, List, Optional, Set

from archive_zero.log_utils import log_event


def resolve_location(base: str, page: str) -> str:
    base = (base or ".").rstrip("/")
    return f"{base}/{page}"


class Navigator:
    """Fire-and-forget page loads requested by view, random and home."""

    def __init__(self, base: str = ".", opener: Optional[Callable[[str], object]] = None, logger: Optional[logging.Logger] = None) -> None:
        self.base = base
        self.opener = opener
        self.logger = logger
        self.requests: List[str] = []
        self._pending: Set[asyncio.Task] = set()

    def navigate(self, page: str) -> None:
        self.requests.append(page)
        log_event(self.logger, "navigate %s", page)
        if self.opener:
            self.opener(resolve_location(self.base, page))

    async def _later(self, page: str, delay: float) -> None:
        await asyncio.sleep(delay)
        self.navigate(page)

    def schedule(self, page: str, delay: float) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(self._later(page, delay))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def drain(self) -> None:
        while self._pending:
            await asyncio.gather(*list(self._pending))
