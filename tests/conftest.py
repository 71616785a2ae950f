"""
Pytest configuration and fixtures.

Every test gets a fresh application backed by an in-memory mongomock
client, plus helpers for creating users, categories and products.
"""

from decimal import Decimal

import mongomock
import pytest
from fastapi.testclient import TestClient

from storefront.core.config import Settings
from storefront.main import create_app
from storefront.models.product import ProductCreateRequest
from storefront.models.user import UserRole
from storefront.security.models import Identity
from storefront.security.passwords import hash_password
from storefront.security.tokens import generate_key_pair


@pytest.fixture
def settings():
    private_key, public_key = generate_key_pair()
    return Settings(
        _env_file=None,
        mongo_database="storefront_test",
        token_private_key=private_key,
        token_public_key=public_key,
    )


@pytest.fixture
def mongo_client():
    return mongomock.MongoClient()


@pytest.fixture
def app(settings, mongo_client):
    return create_app(settings, mongo_client=mongo_client)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


# ============================================================================
# Storage and services
# ============================================================================

@pytest.fixture
def product_db(app):
    return app.state.product_db


@pytest.fixture
def cart_db(app):
    return app.state.cart_db


@pytest.fixture
def order_db(app):
    return app.state.order_db


@pytest.fixture
def placement(app):
    return app.state.order_placement


@pytest.fixture
def order_service(app):
    return app.state.order_service


# ============================================================================
# Users
# ============================================================================

def _create_user(app, name, email, role=UserRole.USER):
    return app.state.user_db.create_user(
        name=name,
        email=email,
        password_hash=hash_password("password"),
        role=role,
    )


def _headers(app, user):
    return {"Authorization": f"Bearer {app.state.token_signer.issue(user.id, user.role)}"}


@pytest.fixture
def user(app):
    return _create_user(app, "User", "user@test.com")


@pytest.fixture
def other_user(app):
    return _create_user(app, "Another User", "another@test.com")


@pytest.fixture
def admin(app):
    return _create_user(app, "Admin", "admin@test.com", role=UserRole.ADMIN)


@pytest.fixture
def user_identity(user):
    return Identity(user_id=user.id, role=user.role)


@pytest.fixture
def other_identity(other_user):
    return Identity(user_id=other_user.id, role=other_user.role)


@pytest.fixture
def admin_identity(admin):
    return Identity(user_id=admin.id, role=admin.role)


@pytest.fixture
def user_headers(app, user):
    return _headers(app, user)


@pytest.fixture
def other_headers(app, other_user):
    return _headers(app, other_user)


@pytest.fixture
def admin_headers(app, admin):
    return _headers(app, admin)


# ============================================================================
# Catalog
# ============================================================================

@pytest.fixture
def category(app):
    return app.state.category_db.create_category("Electronics")


@pytest.fixture
def make_product(product_db, category):
    """Factory creating products in the default category"""

    def _make(name="Test Product", price="10", stock=5):
        return product_db.create_product(
            ProductCreateRequest(
                name=name,
                description=f"{name} description",
                price=Decimal(price),
                category_id=category.id,
                stock=stock,
            )
        )

    return _make
