"""Catalogs — the fixed name pool (capacity ceiling) and chat phrase templates.

Invariants:
    - COW_NAMES is immutable; its size is the maximum number of cows that can exist
    - Every phrase template contains exactly one "{}" placeholder for the cow name
    - normalize_cow_name returns the catalog spelling or None (never a non-catalog name)

Design Decisions:
    - frozenset/tuple constants over mutable module globals: read-only, process-wide
    - rng is injectable so callers and tests can seed selection
"""

import random

from cowchat.core.domain_types import CowName


COW_NAMES: frozenset[str] = frozenset({
    "Arabella", "Bella", "Bessie", "Betty", "Bianca", "Blackjack", "Bossy",
    "Brownie", "Buttercup", "Butterscotch", "Cayenne", "Clarabelle", "Cookie",
    "Daisy", "Domino", "Dottie", "Flossie", "Gertie", "Ginger", "Goldie",
    "Guenevere", "Guinness", "Henrietta", "Maggie", "Marshmallow", "Millie",
    "Minnie", "Muffin", "Nellie", "Oreo", "Peaches", "Penelope", "Penny",
    "Phoebe", "Popcorn", "Princess", "Rosie", "Ruby", "Smokey", "Snowflake",
    "Speckles", "Sprinkles", "Sugar", "Sweetie",
})

CATALOG_SIZE = len(COW_NAMES)

COW_PHRASES: tuple[str, ...] = (
    "Mooo! {} understands.",
    "Mooo! {} offers kind words of encouragement.",
    "Mooo! {} thinks it's all for the best.",
    "Mooo! {} thinks you tried your best.",
    "Mooo! {} can't really disagree.",
    "Mooo! {} appreciates you making an effort.",
)

_NAMES_BY_LOWER = {name.lower(): name for name in COW_NAMES}


def normalize_cow_name(name: str) -> CowName | None:
    """Map any casing of a catalog name to its catalog spelling."""
    match = _NAMES_BY_LOWER.get(name.strip().lower())
    return CowName(match) if match else None


def make_cow_phrase(name: str, rng: random.Random | None = None) -> str:
    """Pick a reply template uniformly at random and fill in the cow's name."""
    template = (rng or random).choice(COW_PHRASES)
    return template.replace("{}", name)
