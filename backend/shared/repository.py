"""
Base repository class for document access.

Provides a common abstraction layer for all repositories, encapsulating
JSON document store access and providing shared utilities for data operations.
"""

from typing import Any, ClassVar, Generic, TypeVar

from .store import JsonDocumentStore


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for document operations:
    - Store access via self._store
    - Registration of the documents' default values
    - Generic type parameter for model type hints

    Subclasses declare the documents they own in DEFAULTS and implement
    domain-specific data access methods, handling dict-to-Pydantic model
    mapping internally.

    Example:
        class UserRepository(BaseRepository[User]):
            DEFAULTS = {"users": {}}

            async def get(self, user_id: str) -> Optional[User]:
                users = await self._store.read("users")
                data = users.get(user_id)
                return User.model_validate(data) if data else None
    """

    DEFAULTS: ClassVar[dict[str, Any]] = {}

    def __init__(self, store: JsonDocumentStore) -> None:
        """
        Initialize the repository with a document store.

        Args:
            store: JSON document store shared by all repositories.
        """
        self._store = store
        for name, value in self.DEFAULTS.items():
            store.register_default(name, value)
