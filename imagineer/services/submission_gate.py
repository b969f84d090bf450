from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, TypeVar

from imagineer.core.errors import SubmissionSuperseded

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SubmissionGate:
    """Keeps at most one in-flight submission per session key.

    Starting a new submission cancels the previous one for the same key; the
    earlier caller gets SubmissionSuperseded instead of a stale result.
    """

    def __init__(self) -> None:
        self._inflight: dict[str, asyncio.Task] = {}

    def inflight(self, key: str) -> bool:
        task = self._inflight.get(key)
        return task is not None and not task.done()

    async def run(self, key: str, work: Awaitable[T]) -> T:
        previous = self._inflight.get(key)
        if previous is not None and not previous.done():
            logger.info("submission_superseded session=%s", key)
            previous.cancel()

        task = asyncio.ensure_future(work)
        self._inflight[key] = task
        try:
            return await task
        except asyncio.CancelledError:
            if task.cancelled() and self._inflight.get(key) is not task:
                raise SubmissionSuperseded() from None
            raise
        finally:
            if self._inflight.get(key) is task:
                del self._inflight[key]
