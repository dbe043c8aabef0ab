"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All storage IO accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, in-memory fakes need no base class
    - Async in Protocol: boundary methods are async because implementations do IO,
      but the core planning functions that consume their results are plain functions
"""

from contextlib import AbstractAsyncContextManager
from typing import Callable, Protocol

from cowchat.core.domain_types import ChatSessionRecord, Cow, CowId, CowName


class CowRepository(Protocol):
    """Contract for cow and chat-session persistence — implemented by shell."""
    async def count(self) -> int: ...
    async def list_cows(self) -> list[Cow]: ...
    async def exists(self, name: str, case_insensitive: bool = False) -> bool: ...
    async def used_names(self) -> set[CowName]: ...
    async def max_id(self) -> CowId: ...
    async def insert_cows(self, cows: list[Cow]) -> None: ...
    async def insert_chat_session(self, record: ChatSessionRecord) -> None: ...


# Opens a short-lived repository scope (one pooled connection for its duration).
RepositoryScope = Callable[[], AbstractAsyncContextManager[CowRepository]]
