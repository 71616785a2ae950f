"""
Storefront Application

E-commerce backend for users, products, categories, carts and orders,
backed by MongoDB.
"""

import os
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from dotenv import load_dotenv
from pymongo import MongoClient
from pymongo.errors import PyMongoError

from .core.config import Settings, get_settings
from .database import (
    CartDatabase,
    CategoryDatabase,
    OrderDatabase,
    ProductDatabase,
    UserDatabase,
    create_client,
    ensure_indexes,
)
from .exceptions import StorefrontError
from .routes import cart_router, categories_router, orders_router, products_router, users_router
from .security.auth_middleware import AuthenticationMiddleware
from .security.tokens import TokenSigner, TokenVerifier, generate_key_pair, public_key_from_private
from .services import OrderPlacementService, OrderService

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else settings.log_level.upper(),
        format=LOG_FORMAT,
    )
    # Suppress noisy library loggers
    logging.getLogger("pymongo").setLevel(logging.WARNING)


def build_token_pair(settings: Settings) -> tuple[TokenSigner, TokenVerifier]:
    """
    Create the token signer and verifier from configured keys.

    Without a configured private key an ephemeral key pair is generated,
    so tokens stop verifying after a restart.
    """
    private_key = settings.get_token_private_key()
    if private_key:
        public_key = settings.get_token_public_key() or public_key_from_private(private_key)
    else:
        logger.warning("No token signing key configured - using an ephemeral key pair")
        private_key, public_key = generate_key_pair()

    return (
        TokenSigner(private_key, ttl_seconds=settings.token_ttl_seconds),
        TokenVerifier(public_key),
    )


def create_app(settings: Optional[Settings] = None, mongo_client: Optional[MongoClient] = None) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Configuration; loaded from the environment if omitted
        mongo_client: Client to use instead of one built from settings
    """
    settings = settings or get_settings()
    configure_logging(settings)

    client = mongo_client if mongo_client is not None else create_client(settings)
    db = client[settings.mongo_database]

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan events"""
        logger.info("Storefront starting up...")
        logger.info(f"MongoDB database: {settings.mongo_database}")
        ensure_indexes(db)
        yield
        logger.info("Storefront shutting down...")
        client.close()

    app = FastAPI(
        title=settings.app_name,
        description="E-commerce API for users, products, categories, carts and orders",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.user_db = UserDatabase(db["users"])
    app.state.category_db = CategoryDatabase(db["categories"])
    app.state.product_db = ProductDatabase(db["products"])
    app.state.cart_db = CartDatabase(db["carts"])
    app.state.order_db = OrderDatabase(db["orders"])
    app.state.order_placement = OrderPlacementService(
        product_db=app.state.product_db,
        cart_db=app.state.cart_db,
        order_db=app.state.order_db,
    )
    app.state.order_service = OrderService(app.state.order_db)

    signer, verifier = build_token_pair(settings)
    app.state.token_signer = signer

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(AuthenticationMiddleware, verifier=verifier)

    @app.exception_handler(StorefrontError)
    async def storefront_error_handler(request: Request, exc: StorefrontError):
        content = {"detail": exc.message}
        if exc.status_code < 500:
            content.update(exc.details)
        return JSONResponse(status_code=exc.status_code, content=content)

    @app.exception_handler(PyMongoError)
    async def storage_error_handler(request: Request, exc: PyMongoError):
        logger.error(f"Storage failure on {request.method} {request.url.path}", exc_info=exc)
        return JSONResponse(status_code=500, content={"detail": "Server Error"})

    app.include_router(users_router)
    app.include_router(categories_router)
    app.include_router(products_router)
    app.include_router(cart_router)
    app.include_router(orders_router)

    @app.get("/")
    async def home():
        return {
            "message": "E-commerce API is running...",
            "docs": "/docs",
            "endpoints": {
                "users": "/api/users",
                "products": "/api/products",
                "categories": "/api/categories",
                "cart": "/api/cart",
                "orders": "/api/orders",
            },
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {"status": "healthy", "service": "storefront"}

    return app


def main() -> None:
    import uvicorn

    load_dotenv(os.path.join(os.getcwd(), "config", ".env"))
    settings = get_settings()

    uvicorn.run(
        "storefront.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    main()
