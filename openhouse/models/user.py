"""
Signed-in user identity.

The identity comes from a third-party token and is cached client-side as
a cookie holding URL-encoded JSON: {"name": ..., "email": ..., "picture": ...}.
"""

from dataclasses import dataclass, asdict


@dataclass
class User:
    """
    Attributes:
        name: Display name; also used as the author of comments.
        email: Account email; its local part is the API handle.
        picture: Avatar URL.
    """
    
    name: str
    email: str
    picture: str = ""
    
    def __post_init__(self) -> None:
        if not self.email or "@" not in self.email:
            raise ValueError(f"User email must contain '@', got {self.email!r}")
    
    @property
    def user_name(self) -> str:
        """API handle: the part of the email before '@'."""
        return self.email.split("@")[0]
    
    def to_dict(self) -> dict:
        return asdict(self)
    
    @classmethod
    def from_dict(cls, data: dict) -> "User":
        return cls(
            name=data.get("name") or "",
            email=data.get("email") or "",
            picture=data.get("picture") or "",
        )
    
    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"
