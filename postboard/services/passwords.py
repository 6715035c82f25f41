"""
PostBoard Backend — Password Hashing
======================================

What:  Salted password hashing and verification.
How:   passlib's CryptContext, configured from settings. The first scheme in
       `password_hash_schemes` hashes new passwords; older schemes are still
       verified and flagged for rehash.
"""

from typing import Optional, Tuple

from passlib.context import CryptContext

from postboard.config import settings

password_context = CryptContext(schemes=settings.password_hash_schemes, deprecated="auto")

# Verified against when the login email is unknown, so both failure paths
# spend the same hashing time.
_DUMMY_HASH = password_context.hash("postboard-dummy-password")


def hash_password(password: str) -> str:
    return password_context.hash(password)


def verify_password(password: str, hashed: Optional[str]) -> Tuple[bool, Optional[str]]:
    """
    Check `password` against `hashed`.

    Returns (valid, new_hash). `new_hash` is set when the stored hash uses a
    deprecated scheme or parameters and should be replaced. A None `hashed`
    still runs a full verification against a dummy hash and returns False.
    """
    if hashed is None:
        password_context.verify(password, _DUMMY_HASH)
        return False, None
    return password_context.verify_and_update(password, hashed)
