"""Cow Routes — count, beckon and list the cows in the meadow.

Invariants:
    - BeckonCowsRequest validated by Pydantic before the allocator runs
    - Every route uses one request-scoped repository (one pooled connection)
    - Errors propagate as CowChatError to the global handlers (no retries)
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from cowchat.api.dependencies import get_cow_allocator
from cowchat.schemas.cow import BeckonCowsRequest, CowListResponse
from cowchat.services.cow_allocator import CowAllocator

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/cows", tags=["cows"])


@router.get("/count", response_class=PlainTextResponse)
async def count_cows(allocator: CowAllocator = Depends(get_cow_allocator)):
    """Plain-text number of cows currently in the meadow."""
    count = await allocator.count()
    logger.debug(f"Told client there were {count} cows.", extra={"count": count})
    return PlainTextResponse(str(count))


@router.post("/beckon", response_model=CowListResponse)
async def beckon_cows(
    body: BeckonCowsRequest,
    allocator: CowAllocator = Depends(get_cow_allocator),
):
    """Call 1-5 new cows into the meadow (fewer if the catalog runs out)."""
    cows = await allocator.allocate(body.count)
    return CowListResponse.from_domain(cows)


@router.get("/list", response_model=CowListResponse)
async def list_cows(allocator: CowAllocator = Depends(get_cow_allocator)):
    """Every cow, in id order."""
    cows = await allocator.list_cows()
    logger.debug(
        f"Reporting on {len(cows)} existing cows to client.",
        extra={"count": len(cows)},
    )
    return CowListResponse.from_domain(cows)
