"""
Authorization chain repository port (interface).
"""
import uuid
from abc import ABC, abstractmethod
from typing import List, Optional

from authorizations.domain.authorization_chain import AuthorizationChain


class AuthorizationChainRepository(ABC):
    """Abstract repository for AuthorizationChain entities."""

    @abstractmethod
    async def find_by_id(self, chain_id: uuid.UUID) -> Optional[AuthorizationChain]:
        pass

    @abstractmethod
    async def find_by_code(self, verification_code: str) -> Optional[AuthorizationChain]:
        """
        Find a chain by its public verification code.

        Returns:
            AuthorizationChain entity or None if not found
        """
        pass

    @abstractmethod
    async def find_active_for_product(self, product_id: uuid.UUID) -> Optional[AuthorizationChain]:
        pass

    @abstractmethod
    async def history(self, product_id: uuid.UUID) -> List[AuthorizationChain]:
        """All chains of a product, newest first."""
        pass

    @abstractmethod
    async def create(self, chain: AuthorizationChain) -> AuthorizationChain:
        """
        Insert a chain, regenerating the verification code on collision.

        Returns the already active chain instead when the product has one.
        """
        pass

    @abstractmethod
    async def set_ledger_hash(self, chain_id: uuid.UUID, ledger_hash: str) -> None:
        pass

    @abstractmethod
    async def save(self, chain: AuthorizationChain) -> AuthorizationChain:
        """Persist a changed chain (revocation)."""
        pass

    @abstractmethod
    async def product_ids_without_active_chain(self) -> List[uuid.UUID]:
        """Products still waiting for issuance, oldest first."""
        pass
