"""
cf-cache-utils — Security Module

One-time action tokens and the login-time leaked-credential check.
"""

from .leaked_credentials import (
    EXPOSED_CREDENTIAL_HEADER,
    LEAKED_REASON,
    check_leaked_credentials,
    password_reset_notice,
)
from .nonces import NonceStore

__all__ = [
    "NonceStore",
    "EXPOSED_CREDENTIAL_HEADER",
    "LEAKED_REASON",
    "check_leaked_credentials",
    "password_reset_notice",
]
