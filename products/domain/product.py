"""
Product domain entity.

A physical or digital good a licensee sells under an approved license.
It contains business logic and is independent of infrastructure.
"""
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, Optional, Tuple

from core.domain.exceptions import (
    InsufficientInventoryError,
    InvalidStatusTransitionError,
    ProductUnavailableError,
)
from core.domain.value_objects import ProductStatus, to_money

MUTABLE_FIELDS = frozenset(
    {
        "title",
        "description",
        "category",
        "price",
        "inventory_count",
        "images",
        "specifications",
        "tags",
    }
)

# Manual transitions; active -> sold_out and sold_out -> active happen
# through purchase and restock.
ALLOWED_TRANSITIONS = {
    ProductStatus.DRAFT: frozenset({ProductStatus.ACTIVE}),
    ProductStatus.ACTIVE: frozenset({ProductStatus.SUSPENDED}),
    ProductStatus.SUSPENDED: frozenset({ProductStatus.ACTIVE}),
    ProductStatus.SOLD_OUT: frozenset({ProductStatus.SUSPENDED}),
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Product:
    """
    Product domain entity.

    Exists only while its license remains valid; the license is the
    approved LicenseApplication it references.
    """

    id: uuid.UUID
    creator_id: uuid.UUID
    license_id: uuid.UUID
    title: str
    description: str
    category: str
    price: Decimal
    inventory_count: int
    status: ProductStatus
    sales_count: int
    created_at: datetime
    updated_at: datetime
    images: Tuple[str, ...] = ()
    specifications: Dict[str, Any] = field(default_factory=dict)
    tags: Tuple[str, ...] = ()

    def __post_init__(self):
        """Validate product entity."""
        if not self.title or not self.title.strip():
            raise ValueError("Product title cannot be empty")
        if len(self.title) > 255:
            raise ValueError("Product title too long")
        if not self.creator_id:
            raise ValueError("Creator ID is required")
        if not self.license_id:
            raise ValueError("License ID is required")
        price = to_money(self.price)
        if price <= 0:
            raise ValueError("Price must be greater than zero")
        object.__setattr__(self, "price", price)
        if isinstance(self.inventory_count, bool) or not isinstance(self.inventory_count, int):
            raise ValueError("Inventory count must be an integer")
        if self.inventory_count < 0:
            raise ValueError("Inventory count cannot be negative")
        if self.sales_count < 0:
            raise ValueError("Sales count cannot be negative")

    @classmethod
    def create(
        cls,
        creator_id: uuid.UUID,
        license_id: uuid.UUID,
        title: str,
        price: Any,
        inventory_count: int = 0,
        description: str = "",
        category: str = "",
        images: Tuple[str, ...] = (),
        specifications: Optional[Dict[str, Any]] = None,
        tags: Tuple[str, ...] = (),
        product_id: Optional[uuid.UUID] = None,
    ) -> "Product":
        """
        Create a new draft Product.

        Returns:
            Product entity instance

        Raises:
            ValueError: If a field is malformed
        """
        now = _utcnow()
        return cls(
            id=product_id or uuid.uuid4(),
            creator_id=creator_id,
            license_id=license_id,
            title=(title or "").strip(),
            description=description or "",
            category=category or "",
            price=price,
            inventory_count=inventory_count,
            status=ProductStatus.DRAFT,
            sales_count=0,
            created_at=now,
            updated_at=now,
            images=tuple(images),
            specifications=dict(specifications or {}),
            tags=tuple(tags),
        )

    def is_owned_by(self, account_id: uuid.UUID) -> bool:
        return self.creator_id == account_id

    @property
    def is_live(self) -> bool:
        """Active or draft; a live product blocks revoking its license."""
        return self.status in (ProductStatus.ACTIVE, ProductStatus.DRAFT)

    def update(self, **changes) -> "Product":
        """
        Return a copy with updated fields.

        Restocking a sold-out product makes it active again.

        Raises:
            ValueError: If a field is unknown or invalid
        """
        unknown = set(changes) - MUTABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update field(s): {', '.join(sorted(unknown))}")
        for name in ("images", "tags"):
            if name in changes:
                changes[name] = tuple(changes[name] or ())
        if "specifications" in changes:
            changes["specifications"] = dict(changes["specifications"] or {})

        updated = replace(self, updated_at=_utcnow(), **changes)
        if updated.status == ProductStatus.SOLD_OUT and updated.inventory_count > 0:
            updated = replace(updated, status=ProductStatus.ACTIVE)
        return updated

    def change_status(self, new_status: ProductStatus) -> "Product":
        """
        Move to a new status through an allowed manual transition.

        The caller checks the license before activating.

        Raises:
            InvalidStatusTransitionError: If the transition is not allowed
                or activation finds no inventory
        """
        if new_status not in ALLOWED_TRANSITIONS.get(self.status, frozenset()):
            raise InvalidStatusTransitionError(
                f"Cannot move product from {self.status.value} to {new_status.value}"
            )
        if new_status == ProductStatus.ACTIVE and self.inventory_count <= 0:
            raise InvalidStatusTransitionError("Cannot activate a product without inventory")
        return replace(self, status=new_status, updated_at=_utcnow())

    def sell(self, quantity: int) -> "Product":
        """
        Take ``quantity`` units out of inventory.

        Callers hold the product row lock.

        Raises:
            InsufficientInventoryError: If sold out or short on stock
            ProductUnavailableError: If the product is not active
        """
        if self.status == ProductStatus.SOLD_OUT:
            raise InsufficientInventoryError(f"Product {self.id} is sold out")
        if self.status != ProductStatus.ACTIVE:
            raise ProductUnavailableError(f"Product {self.id} is {self.status.value}")
        if self.inventory_count < quantity:
            raise InsufficientInventoryError(
                f"Only {self.inventory_count} unit(s) of product {self.id} left"
            )
        remaining = self.inventory_count - quantity
        return replace(
            self,
            inventory_count=remaining,
            sales_count=self.sales_count + quantity,
            status=ProductStatus.SOLD_OUT if remaining == 0 else self.status,
            updated_at=_utcnow(),
        )
