"""Allocation Planning — pure computation of which cows a beckon creates.

Invariants:
    - effective count = min(requested, capacity - current); zero raises CapacityExhaustedError
    - Selected names are distinct, drawn from the catalog, disjoint from used names
    - Ids are max_id+1 .. max_id+n, assigned in selection order
    - Color uniform over CowColor, age uniform in [5, 30], weight uniform in [1300, 1800]

Design Decisions:
    - Pure functions, no IO: the service reads state, calls plan_allocation, writes the result
    - Candidates sorted before sampling so a seeded rng reproduces the same plan
"""

import random

from cowchat.core.catalogs import CATALOG_SIZE, COW_NAMES
from cowchat.core.domain_types import (
    Cow, CowColor, CowId, CowName,
    MIN_COW_AGE, MAX_COW_AGE, MIN_COW_WEIGHT, MAX_COW_WEIGHT,
)
from cowchat.core.errors import CapacityExhaustedError

_COLORS = tuple(CowColor)


def compute_effective_count(
    requested: int, current: int, capacity: int = CATALOG_SIZE,
) -> int:
    """How many cows can actually be created right now."""
    return max(0, min(requested, capacity - current))


def choose_names(
    used_names: set[str], count: int, rng: random.Random | None = None,
) -> list[CowName]:
    """Sample `count` unused catalog names without replacement."""
    available = sorted(COW_NAMES - set(used_names))
    chosen = (rng or random).sample(available, min(count, len(available)))
    return [CowName(name) for name in chosen]


def make_cow(
    name: CowName, cow_id: CowId, rng: random.Random | None = None,
) -> Cow:
    """Synthesize the random attributes of a new cow."""
    rng = rng or random
    return Cow(
        name=name,
        id=cow_id,
        color=rng.choice(_COLORS),
        age=rng.randint(MIN_COW_AGE, MAX_COW_AGE),
        weight=rng.randint(MIN_COW_WEIGHT, MAX_COW_WEIGHT),
    )


def plan_allocation(
    requested: int,
    current: int,
    used_names: set[str],
    max_id: int,
    rng: random.Random | None = None,
) -> list[Cow]:
    """Build the batch of new cows for one beckon. Pure, no IO.

    Raises CapacityExhaustedError when the meadow is already full.
    """
    effective = compute_effective_count(requested, current)
    if effective == 0:
        raise CapacityExhaustedError()
    names = choose_names(used_names, effective, rng)
    return [
        make_cow(name, CowId(max_id + index + 1), rng)
        for index, name in enumerate(names)
    ]
