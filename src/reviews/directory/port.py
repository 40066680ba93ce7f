"""Reference directory port (abstract interface).

The catalog and identity systems live outside this bounded context. Reviews
only need to know whether a product or user id refers to something real.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class ProductRef:
    product_id: str
    name: str | None = None


@dataclass(frozen=True)
class UserRef:
    user_id: str
    display_name: str | None = None


class ReferenceDirectory(ABC):
    """Lookup of products and users owned by other systems."""

    @abstractmethod
    def find_product(self, product_id: str) -> ProductRef | None:
        """Return the product, or None when it does not exist."""
        ...

    @abstractmethod
    def find_user(self, user_id: str) -> UserRef | None:
        """Return the user, or None when it does not exist."""
        ...
