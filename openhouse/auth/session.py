"""
Identity session.

The identity provider hands back a signed token; its payload carries the
user's name, email and picture. The decoded identity is cached as the "user"
cookie (URL-encoded JSON) so later visits skip the sign-in step.

Views never read the cookie themselves: they receive a Session, which holds
the signed-in user (if any) and the gallery's shuffle seed for this session.
"""

from dataclasses import dataclass
import json
import random
from typing import Optional
from urllib.parse import quote, unquote

import jwt

from openhouse.config import GALLERY_SHUFFLE_SEED
from openhouse.models.user import User
from openhouse.storage.base import KeyValueStorage

USER_COOKIE = "user"
TOKEN_KEY = "userToken"
SEED_KEY = "gallerySeed"


class AuthenticationRequired(Exception):
    """Raised when a view that needs a signed-in user gets an anonymous session."""


def decode_credential(token: str) -> Optional[User]:
    """
    Decode an identity token into a User.
    
    The signature is not verified here; trust in the token is the identity
    provider's concern.
    
    Args:
        token: Encoded identity token.
        
    Returns:
        User, or None if the token cannot be decoded or lacks an email.
    """
    try:
        claims = jwt.decode(token, options={"verify_signature": False})
    except jwt.PyJWTError as e:
        print(f"[session] Failed to decode identity token: {e}")
        return None
    
    try:
        return User(
            name=claims.get("name") or "",
            email=claims.get("email") or "",
            picture=claims.get("picture") or "",
        )
    except ValueError as e:
        print(f"[session] Identity token has no usable email: {e}")
        return None


def encode_user_cookie(user: User) -> str:
    """Serialize a user as the URL-encoded JSON cookie value."""
    return quote(json.dumps(user.to_dict()), safe="")


def decode_user_cookie(value: Optional[str]) -> Optional[User]:
    """
    Parse the "user" cookie value.
    
    Returns:
        User, or None when the cookie is absent or malformed.
    """
    if not value:
        return None
    try:
        data = json.loads(unquote(value))
        return User.from_dict(data)
    except (ValueError, TypeError, AttributeError) as e:
        print(f"[session] Failed to parse user cookie: {e}")
        return None


def new_seed() -> int:
    """Shuffle seed for a new session; fixed when GALLERY_SHUFFLE_SEED is set."""
    if GALLERY_SHUFFLE_SEED is not None:
        return GALLERY_SHUFFLE_SEED
    return random.randrange(2**32)


@dataclass
class Session:
    """
    Explicit per-session context handed to views.
    
    Attributes:
        user: Signed-in user, or None for an anonymous session.
        seed: Gallery ordering seed, fixed for the session's lifetime.
    """
    user: Optional[User] = None
    seed: int = 0
    
    @property
    def is_authenticated(self) -> bool:
        return self.user is not None
    
    def require_user(self) -> User:
        if self.user is None:
            raise AuthenticationRequired("Login required")
        return self.user


class SessionStore:
    """
    Persists the session in local storage.
    
    Keys:
        user: URL-encoded JSON identity (same format as the browser cookie).
        userToken: Raw identity token from the last login.
        gallerySeed: Shuffle seed chosen at login.
    """
    
    def __init__(self, storage: KeyValueStorage):
        self.storage = storage
    
    def login(self, credential: str) -> Optional[Session]:
        """
        Decode credential and start a new session.
        
        Returns:
            The new Session, or None if the credential is unusable (nothing
            is stored in that case).
        """
        user = decode_credential(credential)
        if user is None:
            return None
        
        seed = new_seed()
        self.storage.set(USER_COOKIE, encode_user_cookie(user))
        self.storage.set(TOKEN_KEY, credential)
        self.storage.set(SEED_KEY, str(seed))
        print(f"[session] Signed in as {user}")
        return Session(user=user, seed=seed)
    
    def current(self) -> Session:
        """Restore the stored session; anonymous when nothing usable is stored."""
        user = decode_user_cookie(self.storage.get(USER_COOKIE))
        
        raw_seed = self.storage.get(SEED_KEY)
        try:
            seed = int(raw_seed)
        except (TypeError, ValueError):
            seed = new_seed()
            if user is not None:
                self.storage.set(SEED_KEY, str(seed))
        
        return Session(user=user, seed=seed)
    
    def logout(self) -> None:
        self.storage.remove(USER_COOKIE)
        self.storage.remove(TOKEN_KEY)
        self.storage.remove(SEED_KEY)
