"""
Bearer Token Signing

Tokens are EdDSA-signed JWTs carrying ``sub`` (user id), ``role``, ``iat``,
``exp`` and ``jti`` claims.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ed25519
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey, Ed25519PublicKey

from ..exceptions import AuthenticationError
from ..models.user import UserRole
from .models import Identity

ALGORITHM = "EdDSA"


def generate_key_pair() -> tuple[str, str]:
    """
    Generate an Ed25519 key pair.

    Returns:
        Tuple of (private_key_pem, public_key_pem)
    """
    private_key = ed25519.Ed25519PrivateKey.generate()
    private_pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )
    public_pem = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    return private_pem.decode(), public_pem.decode()


def public_key_from_private(private_key_pem: str) -> str:
    """Derive the PEM public key for a PEM private key"""
    private_key = TokenSigner._load_private_key(private_key_pem)
    return private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode()


class TokenSigner:
    """
    Issues signed bearer tokens.

    Usage:
        signer = TokenSigner(private_key_pem="...", ttl_seconds=3600)
        token = signer.issue(user_id="...", role=UserRole.USER)
    """

    def __init__(self, private_key_pem: str, ttl_seconds: int = 3600):
        """
        Args:
            private_key_pem: PEM-encoded Ed25519 private key
            ttl_seconds: How long issued tokens remain valid
        """
        self.ttl_seconds = ttl_seconds
        self._signing_key = self._load_private_key(private_key_pem)

    @staticmethod
    def _load_private_key(pem: str) -> Ed25519PrivateKey:
        """Load private key from PEM string"""
        pem_bytes = pem.encode() if isinstance(pem, str) else pem

        try:
            key = serialization.load_pem_private_key(pem_bytes, password=None)
        except Exception as e:
            raise ValueError(f"Failed to load private key: {e}")

        if not isinstance(key, Ed25519PrivateKey):
            raise ValueError("Token signing key must be an Ed25519 key")
        return key

    def issue(self, user_id: str, role: UserRole = UserRole.USER) -> str:
        """Create a token for the given user"""
        now = datetime.now(timezone.utc)
        expires = now + timedelta(seconds=self.ttl_seconds)

        payload = {
            "sub": user_id,
            "role": role.value,
            "iat": int(now.timestamp()),
            "exp": int(expires.timestamp()),
            "jti": str(uuid.uuid4()),
        }
        return jwt.encode(payload, self._signing_key, algorithm=ALGORITHM)


class TokenVerifier:
    """
    Verifies bearer tokens issued by TokenSigner.

    Usage:
        verifier = TokenVerifier(public_key_pem="...")
        identity = verifier.verify(token)
    """

    def __init__(self, public_key_pem: str, max_clock_skew_seconds: int = 60):
        """
        Args:
            public_key_pem: PEM-encoded Ed25519 public key
            max_clock_skew_seconds: Leeway applied to token expiry
        """
        self.max_clock_skew = max_clock_skew_seconds
        self._public_key = self._load_public_key(public_key_pem)

    def _load_public_key(self, pem: str) -> Ed25519PublicKey:
        """Load public key from PEM string"""
        pem_bytes = pem.encode() if isinstance(pem, str) else pem

        try:
            key = serialization.load_pem_public_key(pem_bytes)
        except Exception as e:
            raise ValueError(f"Failed to load public key: {e}")

        if not isinstance(key, Ed25519PublicKey):
            raise ValueError("Token verification key must be an Ed25519 key")
        return key

    def verify(self, token: Optional[str]) -> Identity:
        """
        Verify a token and return the identity it carries.

        Raises:
            AuthenticationError: if the token is malformed, forged or expired
        """
        if not token:
            raise AuthenticationError("Invalid token")

        try:
            claims = jwt.decode(
                token,
                self._public_key,
                algorithms=[ALGORITHM],
                leeway=self.max_clock_skew,
                options={"require": ["sub", "exp"]},
            )
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("Token has expired")
        except jwt.InvalidTokenError:
            raise AuthenticationError("Invalid token")

        try:
            role = UserRole(claims.get("role", UserRole.USER.value))
        except ValueError:
            raise AuthenticationError("Invalid token")

        return Identity(user_id=claims["sub"], role=role, expires=claims["exp"])
