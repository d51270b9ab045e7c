"""
Django implementation of ProductRepository port.
"""
import uuid
from typing import Any, Dict, List, Optional

from asgiref.sync import sync_to_async
from django.db import transaction

from core.domain.exceptions import (
    LicenseNotFoundError,
    ProductHasSalesError,
    ProductNotFoundError,
)
from core.domain.value_objects import ProductStatus
from licenses.infrastructure.models import LicenseApplication as LicenseApplicationModel
from licenses.infrastructure.repositories.django_license_application_repository import (
    application_to_domain,
)
from products.domain.product import Product
from products.infrastructure.models import Product as ProductModel
from products.ports.product_repository import ProductRepository

# Sales that block deletion; pending ones may still complete.
BLOCKING_SALE_STATUSES = ("completed", "pending")


def product_to_domain(model: ProductModel) -> Product:
    """
    Convert Django model to domain entity.

    Args:
        model: Django Product model

    Returns:
        Product domain entity
    """
    return Product(
        id=model.id,
        creator_id=model.creator_id,
        license_id=model.license_id,
        title=model.title,
        description=model.description,
        category=model.category,
        price=model.price,
        inventory_count=model.inventory_count,
        status=ProductStatus(model.status),
        sales_count=model.sales_count,
        created_at=model.created_at,
        updated_at=model.updated_at,
        images=tuple(model.images or ()),
        specifications=dict(model.specifications or {}),
        tags=tuple(model.tags or ()),
    )


def apply_to_model(product: Product, model: ProductModel) -> None:
    """Copy mutable entity state onto a model instance."""
    model.title = product.title
    model.description = product.description
    model.category = product.category
    model.price = product.price
    model.inventory_count = product.inventory_count
    model.images = list(product.images)
    model.specifications = dict(product.specifications)
    model.tags = list(product.tags)
    model.status = product.status.value
    model.sales_count = product.sales_count


def lock_product(product_id: uuid.UUID) -> ProductModel:
    """Fetch a product row with a write lock. Call inside transaction.atomic()."""
    try:
        return ProductModel.objects.select_for_update().get(id=product_id)
    except ProductModel.DoesNotExist as exc:
        raise ProductNotFoundError(f"Product {product_id} not found") from exc


def _ensure_license_valid(license_id: uuid.UUID, lock: bool = False) -> None:
    queryset = LicenseApplicationModel.objects.all()
    if lock:
        queryset = queryset.select_for_update()
    try:
        model = queryset.get(id=license_id)
    except LicenseApplicationModel.DoesNotExist as exc:
        raise LicenseNotFoundError(f"License {license_id} not found") from exc
    application_to_domain(model).ensure_valid()


class DjangoProductRepository(ProductRepository):
    """Django ORM implementation of ProductRepository."""

    @sync_to_async
    def find_by_id(self, product_id: uuid.UUID) -> Optional[Product]:
        try:
            return product_to_domain(ProductModel.objects.get(id=product_id))
        except ProductModel.DoesNotExist:
            return None

    @sync_to_async
    def find_by_license(self, license_id: uuid.UUID) -> List[Product]:
        return [
            product_to_domain(model)
            for model in ProductModel.objects.filter(license_id=license_id)
        ]

    @sync_to_async
    def create(self, product: Product) -> Product:
        """
        Insert a product with its license row locked.

        Revocation locks the same row before counting live products.
        """
        with transaction.atomic():
            _ensure_license_valid(product.license_id, lock=True)
            model = ProductModel(
                id=product.id,
                creator_id=product.creator_id,
                license_id=product.license_id,
            )
            apply_to_model(product, model)
            model.save(force_insert=True)
        return product_to_domain(model)

    @sync_to_async
    def update(self, product_id: uuid.UUID, changes: Dict[str, Any]) -> Product:
        with transaction.atomic():
            model = lock_product(product_id)
            updated = product_to_domain(model).update(**changes)
            if updated.status == ProductStatus.ACTIVE and model.status != ProductStatus.ACTIVE.value:
                # Restock reactivation; revoke locks the same license row
                _ensure_license_valid(model.license_id, lock=True)
            apply_to_model(updated, model)
            model.save()
            return product_to_domain(model)

    @sync_to_async
    def change_status(self, product_id: uuid.UUID, status: ProductStatus) -> Product:
        with transaction.atomic():
            model = lock_product(product_id)
            changed = product_to_domain(model).change_status(status)
            if status == ProductStatus.ACTIVE:
                _ensure_license_valid(model.license_id)
            apply_to_model(changed, model)
            model.save()
            return product_to_domain(model)

    @sync_to_async
    def delete(self, product_id: uuid.UUID) -> None:
        with transaction.atomic():
            model = lock_product(product_id)
            sales = model.transactions.filter(status__in=BLOCKING_SALE_STATUSES).count()
            if sales:
                raise ProductHasSalesError(
                    f"Product {product_id} has {sales} completed or pending sale(s)"
                )
            model.delete()
