"""
Live verification of authorization chains.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

from assets.domain.ip_asset import IPAsset
from authorizations.domain.authorization_chain import AuthorizationChain
from core.domain.value_objects import ApplicationStatus
from licenses.domain.license_application import LicenseApplication
from products.domain.product import Product

VALID_REASON = "Product is authentic and authorized"


@dataclass(frozen=True)
class ChainVerification:
    """Result of verifying a chain by its public code."""

    chain: AuthorizationChain
    product: Optional[Product]
    license: Optional[LicenseApplication]
    ip_asset: Optional[IPAsset]
    is_valid: bool
    reason: str
    ledger_verified: bool


def evaluate_chain(
    chain: AuthorizationChain,
    license: Optional[LicenseApplication],
    ip_asset: Optional[IPAsset],
    ledger_verified: bool,
    now: Optional[datetime] = None,
) -> Tuple[bool, str]:
    """
    Decide whether a chain is valid right now.

    Checks run from the chain outwards; the first failure is the reason.

    Returns:
        (is_valid, human-readable reason)
    """
    if not chain.is_active:
        reason = "Authorization chain was revoked"
        if chain.revocation_reason:
            reason = f"{reason}: {chain.revocation_reason}"
        return False, reason
    if license is None:
        return False, "License no longer exists"
    if not license.is_active or license.status != ApplicationStatus.APPROVED:
        return False, f"License is {license.status.value}"
    if license.is_expired(now):
        return False, f"License expired at {license.expires_at.isoformat()}"
    if ip_asset is None:
        return False, "IP asset no longer exists"
    if not ip_asset.is_approved:
        return False, f"IP asset verification is {ip_asset.verification_status.value}"
    if not ledger_verified:
        return False, "Ledger could not confirm the authorization record"
    return True, VALID_REASON
