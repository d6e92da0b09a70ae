"""
Authentication module.

Identity token decoding, the user cookie, and the explicit Session context.
"""

from openhouse.auth.session import (
    AuthenticationRequired,
    Session,
    SessionStore,
    decode_credential,
    decode_user_cookie,
    encode_user_cookie,
    new_seed,
    USER_COOKIE,
    TOKEN_KEY,
    SEED_KEY,
)

__all__ = [
    "AuthenticationRequired",
    "Session",
    "SessionStore",
    "decode_credential",
    "decode_user_cookie",
    "encode_user_cookie",
    "new_seed",
    "USER_COOKIE",
    "TOKEN_KEY",
    "SEED_KEY",
]
