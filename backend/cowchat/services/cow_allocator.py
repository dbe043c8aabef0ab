"""Cow Allocator — beckons new cows into the meadow and answers pool queries.

Invariants:
    - Capacity is checked against the current count before names are read or rows written
    - One allocate() call runs on one repository (one session); its insert is one transaction
    - Failures are never retried here; they propagate to the API boundary
    - No in-process lock: racing allocations are settled by the cows table constraints

Design Decisions:
    - Impureim sandwich: read state from the repository, plan with core.allocation,
      write the batch back
    - rng injectable so tests can reproduce a plan
"""

import logging
import random

from cowchat.core.allocation import compute_effective_count, plan_allocation
from cowchat.core.catalogs import CATALOG_SIZE
from cowchat.core.domain_types import Cow
from cowchat.core.errors import CapacityExhaustedError
from cowchat.core.repository_protocols import CowRepository

logger = logging.getLogger(__name__)


class CowAllocator:
    """Allocates and reports on cows through a CowRepository."""

    def __init__(self, repo: CowRepository, rng: random.Random | None = None):
        self.repo = repo
        self.rng = rng

    async def count(self) -> int:
        return await self.repo.count()

    async def list_cows(self) -> list[Cow]:
        return await self.repo.list_cows()

    async def exists(self, name: str, case_insensitive: bool = False) -> bool:
        return await self.repo.exists(name, case_insensitive=case_insensitive)

    async def allocate(self, requested_count: int) -> list[Cow]:
        """Create up to requested_count cows with unused names and fresh ids."""
        current = await self.repo.count()
        effective = compute_effective_count(requested_count, current, CATALOG_SIZE)
        if effective == 0:
            logger.info(
                "Beckon refused: meadow is full",
                extra={"count": current},
            )
            raise CapacityExhaustedError()

        used_names = await self.repo.used_names()
        max_id = await self.repo.max_id()
        cows = plan_allocation(effective, current, used_names, max_id, self.rng)
        await self.repo.insert_cows(cows)

        logger.debug(
            "Generated new cows: %s", ", ".join(str(c) for c in cows),
            extra={"count": len(cows)},
        )
        return cows
