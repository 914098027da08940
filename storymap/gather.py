"""Best-effort concurrent fan-out.

gather_settled() runs independent awaitables concurrently and reports each
one's result or exception separately. The group as a whole never raises,
so one failed provider degrades only its own branch.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Outcome(Generic[T]):
    ok: bool
    value: T | None = None
    error: BaseException | None = None

    def value_or(self, default: Any) -> Any:
        return self.value if self.ok else default


async def gather_settled(*aws: Awaitable[Any]) -> list[Outcome[Any]]:
    """Await all branches concurrently; return one Outcome per branch, in order."""
    results = await asyncio.gather(*aws, return_exceptions=True)
    outcomes: list[Outcome[Any]] = []
    for i, result in enumerate(results):
        if isinstance(result, asyncio.CancelledError):
            raise result
        if isinstance(result, BaseException):
            logger.warning("branch %d failed: %s", i, result)
            outcomes.append(Outcome(ok=False, error=result))
        else:
            outcomes.append(Outcome(ok=True, value=result))
    return outcomes
