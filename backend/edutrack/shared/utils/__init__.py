"""
Utilities Package

Contents:
=========
- security: JWT verification of staff access tokens

Usage:
======
    from edutrack.shared.utils.security import SecurityUtils
"""

from edutrack.shared.utils.security import SecurityUtils, TokenClaims

__all__ = [
    "SecurityUtils",
    "TokenClaims",
]
