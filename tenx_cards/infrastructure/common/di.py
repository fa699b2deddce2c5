from collections.abc import Callable
from typing import TypeVar

from dependency_injector.providers import Provider

from tenx_cards.core import container
from tenx_cards.database import DatabaseSession

T = TypeVar("T")


def inject_use_case(provider: Provider[T]) -> Callable[[DatabaseSession], T]:
    """
    Create a FastAPI dependency for a container provider.

    The request-scoped session is bound to ``container.db`` only while the
    provider builds its object graph.
    """

    def dependency(db: DatabaseSession) -> T:
        try:
            container.db.override(db)
            return provider()
        finally:
            container.db.reset_override()

    return dependency
