"""
Product repository port (interface).

This defines the contract for product persistence.
"""
import uuid
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from core.domain.value_objects import ProductStatus
from products.domain.product import Product


class ProductRepository(ABC):
    """Abstract repository for Product entities."""

    @abstractmethod
    async def find_by_id(self, product_id: uuid.UUID) -> Optional[Product]:
        """
        Find a product by ID.

        Args:
            product_id: Product UUID

        Returns:
            Product entity or None if not found
        """
        pass

    @abstractmethod
    async def find_by_license(self, license_id: uuid.UUID) -> List[Product]:
        """Products sold under a license."""
        pass

    @abstractmethod
    async def create(self, product: Product) -> Product:
        """
        Insert a product with its license row locked.

        Raises:
            LicenseNotFoundError: If the license disappeared
            LicenseNotValidError: If the license is no longer approved
            LicenseExpiredError: If the license lapsed
        """
        pass

    @abstractmethod
    async def update(self, product_id: uuid.UUID, changes: Dict[str, Any]) -> Product:
        """
        Apply field changes under the product row lock.

        A restock that reactivates a sold-out product re-checks the license.

        Raises:
            ProductNotFoundError: If the product does not exist
            LicenseNotValidError: If a restock would reactivate under a revoked license
            LicenseExpiredError: If a restock would reactivate under a lapsed license
            ValueError: If a change is invalid
        """
        pass

    @abstractmethod
    async def change_status(self, product_id: uuid.UUID, status: ProductStatus) -> Product:
        """
        Change status under the product row lock.

        Activation re-checks the license.

        Raises:
            ProductNotFoundError: If the product does not exist
            InvalidStatusTransitionError: If the transition is not allowed
            LicenseNotValidError: If activating under an invalid license
            LicenseExpiredError: If activating under a lapsed license
        """
        pass

    @abstractmethod
    async def delete(self, product_id: uuid.UUID) -> None:
        """
        Delete a product that has no completed or in-flight sales.

        Raises:
            ProductNotFoundError: If the product does not exist
            ProductHasSalesError: If sales exist
        """
        pass
