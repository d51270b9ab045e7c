"""
Licenses module - the license workflow engine.

This module handles:
- LicenseApplication entity and its state machine
  (pending -> approved | rejected, approved -> revoked)
- Eligibility and capacity rules that gate approval
- Lazy expiry verification of approved licenses
"""
