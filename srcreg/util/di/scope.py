"""Custom Dishka scopes for srcreg."""

from dishka import BaseScope, new_scope


class Scope(BaseScope):  # type: ignore[misc]  # BaseScope is designed to be subclassed
    """srcreg dependency injection scopes.

    Hierarchy: APP -> UOW

    - APP: Application lifetime (engine, in-memory storage, write lock)
    - UOW: Unit of Work (one database session, one batch of registry calls)
    """

    APP = new_scope("APP")
    UOW = new_scope("UOW")
