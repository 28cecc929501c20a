import hashlib
from typing import Optional


def gravatar_url(email: str, size: int = 80) -> str:
    digest = hashlib.md5(email.strip().lower().encode("utf-8")).hexdigest()
    return f"https://www.gravatar.com/avatar/{digest}?s={size}&d=identicon"


def avatar_url(photo_url: Optional[str], email: Optional[str]) -> Optional[str]:
    """Uploaded photo first, Gravatar of the email otherwise."""
    if photo_url:
        return photo_url
    if email:
        return gravatar_url(email)
    return None
