"""Password hashing (stdlib pbkdf2_hmac). Verification belongs to the auth layer."""

from __future__ import annotations

import base64
import hashlib
import os

_PBKDF2_ALG = "sha256"
_PBKDF2_ITERATIONS = 200_000


def _b64(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def hash_password(password: str) -> str:
    salt = os.urandom(16)
    dk = hashlib.pbkdf2_hmac(_PBKDF2_ALG, password.encode("utf-8"), salt, _PBKDF2_ITERATIONS)
    return f"pbkdf2_{_PBKDF2_ALG}${_PBKDF2_ITERATIONS}${_b64(salt)}${_b64(dk)}"
