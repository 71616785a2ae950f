"""Tests for token signing and password hashing"""

import jwt
import pytest

from storefront.exceptions import AuthenticationError
from storefront.models.user import UserRole
from storefront.security.passwords import hash_password, verify_password
from storefront.security.tokens import (
    TokenSigner,
    TokenVerifier,
    generate_key_pair,
    public_key_from_private,
)


@pytest.fixture(scope="module")
def key_pair():
    return generate_key_pair()


class TestTokens:

    def test_issue_and_verify(self, key_pair):
        private_key, public_key = key_pair
        token = TokenSigner(private_key).issue("user-1", UserRole.ADMIN)

        identity = TokenVerifier(public_key).verify(token)

        assert identity.user_id == "user-1"
        assert identity.is_admin

    def test_token_is_a_standard_jwt(self, key_pair):
        private_key, public_key = key_pair
        token = TokenSigner(private_key, ttl_seconds=600).issue("user-1", UserRole.ADMIN)

        claims = jwt.decode(token, public_key, algorithms=["EdDSA"])

        assert jwt.get_unverified_header(token)["alg"] == "EdDSA"
        assert claims["sub"] == "user-1"
        assert claims["role"] == "admin"
        assert claims["exp"] - claims["iat"] == 600
        assert claims["jti"]

    def test_derived_public_key_verifies(self, key_pair):
        private_key, _ = key_pair
        token = TokenSigner(private_key).issue("user-1")

        assert TokenVerifier(public_key_from_private(private_key)).verify(token).user_id == "user-1"

    def test_tampered_payload_is_rejected(self, key_pair):
        private_key, public_key = key_pair
        token = TokenSigner(private_key).issue("user-1")
        forged = TokenSigner(private_key).issue("user-2", UserRole.ADMIN)
        header, _, signature = token.split(".")
        tampered = f"{header}.{forged.split('.')[1]}.{signature}"

        with pytest.raises(AuthenticationError):
            TokenVerifier(public_key).verify(tampered)

    def test_other_key_is_rejected(self, key_pair):
        private_key, _ = key_pair
        _, other_public_key = generate_key_pair()
        token = TokenSigner(private_key).issue("user-1")

        with pytest.raises(AuthenticationError):
            TokenVerifier(other_public_key).verify(token)

    def test_expired_token_is_rejected(self, key_pair):
        private_key, public_key = key_pair
        token = TokenSigner(private_key, ttl_seconds=-120).issue("user-1")

        with pytest.raises(AuthenticationError, match="expired"):
            TokenVerifier(public_key, max_clock_skew_seconds=60).verify(token)

    def test_expiry_within_clock_skew_is_accepted(self, key_pair):
        private_key, public_key = key_pair
        token = TokenSigner(private_key, ttl_seconds=-10).issue("user-1")

        assert TokenVerifier(public_key, max_clock_skew_seconds=60).verify(token).user_id == "user-1"

    def test_unknown_role_is_rejected(self, key_pair):
        private_key, public_key = key_pair
        signing_key = TokenSigner._load_private_key(private_key)
        token = jwt.encode({"sub": "user-1", "role": "root", "exp": 2**31}, signing_key, algorithm="EdDSA")

        with pytest.raises(AuthenticationError):
            TokenVerifier(public_key).verify(token)

    @pytest.mark.parametrize("token", ["", "invalidtoken", "a.b.c", "abc.!!!"])
    def test_malformed_tokens(self, key_pair, token):
        with pytest.raises(AuthenticationError):
            TokenVerifier(key_pair[1]).verify(token)

    def test_rejects_non_ed25519_key(self):
        with pytest.raises(ValueError):
            TokenSigner("not a pem")


class TestPasswords:

    def test_hash_and_verify(self):
        stored = hash_password("password123")

        assert stored.startswith("scrypt$")
        assert verify_password("password123", stored)
        assert not verify_password("wrong", stored)

    def test_hashes_are_salted(self):
        assert hash_password("password123") != hash_password("password123")

    @pytest.mark.parametrize("stored", ["", "plaintext", "bcrypt$a$b"])
    def test_malformed_hash(self, stored):
        assert not verify_password("password123", stored)
