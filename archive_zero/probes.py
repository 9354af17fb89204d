import asyncio
import logging
from pathlib import Path
from typing import Callable, List, Optional, Sequence

import requests

from archive_zero.log_utils import log_event


def resource_exists(location: str, timeout: float = 2.0) -> bool:
    if location.startswith(("http://", "https://")):
        try:
            resp = requests.head(location, timeout=timeout, allow_redirects=True)
        except requests.RequestException:
            return False
        return resp.ok
    try:
        return Path(location).is_file()
    except OSError:
        return False


async def probe_resources(
    locations: Sequence[str],
    check: Callable[[str], bool] = resource_exists,
    logger: Optional[logging.Logger] = None,
) -> List[str]:
    """Run one existence check per location concurrently; keep the ones that exist.

    Checks may finish in any order; the result is only built once all of them
    have resolved, and keeps the candidate order.
    """

    async def _one(loc: str) -> bool:
        try:
            return bool(await asyncio.to_thread(check, loc))
        except Exception as exc:
            log_event(logger, "probe_failed %s %s", loc, exc)
            return False

    results = await asyncio.gather(*(_one(loc) for loc in locations))
    found = [loc for loc, ok in zip(locations, results) if ok]
    log_event(logger, "probe %d/%d present", len(found), len(locations))
    return found
