"""
Accounts module - identity collaborator and eligibility guard.

This module handles:
- Account entity (role and status as seen by the marketplace)
- IdentityProvider port and its Django-backed adapter
- EligibilityGuard used by every other context for ownership/role checks
"""
