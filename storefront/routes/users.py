"""User API routes"""

import logging

from fastapi import APIRouter, Depends

from ..database.users import UserDatabase
from ..dependencies import get_token_signer, get_user_db
from ..exceptions import AuthenticationError, ConflictError, NotFoundError
from ..models.user import LoginRequest, RegisterRequest, TokenResponse, User
from ..security.auth_middleware import require_user
from ..security.models import Identity
from ..security.passwords import hash_password, verify_password
from ..security.tokens import TokenSigner

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.post("/register", response_model=TokenResponse, status_code=201)
def register(
    request: RegisterRequest,
    user_db: UserDatabase = Depends(get_user_db),
    signer: TokenSigner = Depends(get_token_signer),
):
    """Register a new user and return a token"""
    if user_db.get_user_by_email(request.email):
        raise ConflictError("User already exists")

    user = user_db.create_user(
        name=request.name,
        email=request.email,
        password_hash=hash_password(request.password),
    )
    logger.info(f"Registered user {user.id}")

    return TokenResponse(token=signer.issue(user.id, user.role), user=user.to_public())


@router.post("/login", response_model=TokenResponse)
def login(
    request: LoginRequest,
    user_db: UserDatabase = Depends(get_user_db),
    signer: TokenSigner = Depends(get_token_signer),
):
    """Exchange credentials for a token"""
    user = user_db.get_user_by_email(request.email)
    if not user or not verify_password(request.password, user.password_hash):
        raise AuthenticationError("Invalid Credentials")

    return TokenResponse(token=signer.issue(user.id, user.role), user=user.to_public())


@router.get("/profile", response_model=User)
def get_profile(
    identity: Identity = Depends(require_user),
    user_db: UserDatabase = Depends(get_user_db),
):
    """Get the caller's profile"""
    user = user_db.get_user(identity.user_id)
    if not user:
        raise NotFoundError("User", identity.user_id)
    return user.to_public()
