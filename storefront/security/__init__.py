# Authentication and authorization

from .models import Identity
from .tokens import TokenSigner, TokenVerifier, generate_key_pair, public_key_from_private
from .passwords import hash_password, verify_password
from .auth_middleware import (
    AuthenticationMiddleware,
    AuthDependency,
    require_user,
    require_admin,
)

__all__ = [
    "Identity",
    "TokenSigner",
    "TokenVerifier",
    "generate_key_pair",
    "public_key_from_private",
    "hash_password",
    "verify_password",
    "AuthenticationMiddleware",
    "AuthDependency",
    "require_user",
    "require_admin",
]
