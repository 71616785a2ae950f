"""Password hashing with scrypt"""

import base64
import os

from cryptography.exceptions import InvalidKey
from cryptography.hazmat.primitives.kdf.scrypt import Scrypt

SCHEME = "scrypt"
SALT_BYTES = 16
KEY_LENGTH = 32
COST = 2**14
BLOCK_SIZE = 8
PARALLELISM = 1


def _kdf(salt: bytes) -> Scrypt:
    return Scrypt(salt=salt, length=KEY_LENGTH, n=COST, r=BLOCK_SIZE, p=PARALLELISM)


def hash_password(password: str) -> str:
    """Hash a password as ``scrypt$<salt>$<key>``"""
    salt = os.urandom(SALT_BYTES)
    key = _kdf(salt).derive(password.encode())
    return "$".join([
        SCHEME,
        base64.b64encode(salt).decode(),
        base64.b64encode(key).decode(),
    ])


def verify_password(password: str, stored_hash: str) -> bool:
    """Check a password against a hash produced by hash_password"""
    try:
        scheme, salt_b64, key_b64 = stored_hash.split("$")
    except ValueError:
        return False

    if scheme != SCHEME:
        return False

    try:
        _kdf(base64.b64decode(salt_b64)).verify(password.encode(), base64.b64decode(key_b64))
    except InvalidKey:
        return False
    return True
