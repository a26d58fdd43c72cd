# server/api/auth.py

import logging
from datetime import timedelta
from pydantic import BaseModel
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from core.config import settings
from core.errors import ClientInputError, InternalError, Unauthenticated
from core.security import (
    Identity,
    PasswordHasher,
    SigningKeyMissing,
    TokenRejected,
    TokenService,
)
from core.store import CatalogStore, get_store


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

token_service = TokenService(
    settings.jwt_secret,
    expires_delta=timedelta(minutes=settings.token_expire_minutes),
)
password_hasher = PasswordHasher(rounds=settings.bcrypt_rounds)

NO_HEADER = "Unauthorized: No authorization header provided"
BAD_FORMAT = "Unauthorized: Invalid authorization header format"
INVALID_TOKEN = "Unauthorized: Invalid token"
INVALID_CREDENTIALS = "Invalid credentials"


class Credentials(BaseModel):
    username: str
    password: str


class Token(BaseModel):
    token: str


class Message(BaseModel):
    message: str


# -------------------------------
# Dependencies
# -------------------------------

def get_token_service() -> TokenService:
    return token_service


def get_password_hasher() -> PasswordHasher:
    return password_hasher


def get_current_user(
    request: Request,
    tokens: TokenService = Depends(get_token_service),
) -> Identity:
    """
    Resolves the caller from `Authorization: Bearer <token>`.
    The header must be exactly two space-separated parts; anything else is
    rejected before the token is looked at.
    """
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        raise Unauthenticated(NO_HEADER)

    parts = auth_header.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer":
        raise Unauthenticated(BAD_FORMAT)

    try:
        return tokens.verify(parts[1])
    except TokenRejected as e:
        logger.debug("Rejected bearer token: %s", e.reason.value)
        raise Unauthenticated(INVALID_TOKEN)


# -------------------------------
# Endpoints
# -------------------------------

@router.post("/signup", status_code=status.HTTP_201_CREATED, response_model=Message)
def signup(
    creds: Credentials,
    store: CatalogStore = Depends(get_store),
    hasher: PasswordHasher = Depends(get_password_hasher),
):
    try:
        if store.get_user_by_username(creds.username):
            raise ClientInputError("User already exists")
    except SQLAlchemyError:
        logger.exception("Error looking up user %s", creds.username)
        raise InternalError()

    try:
        hashed = hasher.hash(creds.password)
    except Exception:
        logger.exception("Error hashing password for %s", creds.username)
        raise InternalError()

    try:
        user = store.create_user(creds.username, hashed)
    except IntegrityError:
        # Lost a race with a concurrent signup for the same name
        store.db.rollback()
        raise ClientInputError("User already exists")
    except SQLAlchemyError:
        store.db.rollback()
        logger.exception("Error creating user %s", creds.username)
        raise InternalError()

    logger.info("Registered user %s (%s)", user.username, user.id)
    return {"message": "User created successfully"}


@router.post("/login", response_model=Token)
def login(
    creds: Credentials,
    store: CatalogStore = Depends(get_store),
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
):
    try:
        user = store.get_user_by_username(creds.username)
    except SQLAlchemyError:
        logger.exception("Error during login for %s", creds.username)
        raise InternalError()

    if not user or not hasher.verify(creds.password, user.hashed_password):
        logger.warning("Failed login for %s", creds.username)
        raise Unauthenticated(INVALID_CREDENTIALS)

    try:
        token = tokens.issue(user.id)
    except SigningKeyMissing:
        logger.error("Cannot issue token: JWT_SECRET is not configured")
        raise InternalError()

    logger.info("Login: %s (%s)", user.username, user.id)
    return {"token": token}


@router.post("/logout", response_model=Message)
def logout():
    # Tokens are stateless; the client discards its copy.
    return {"message": "Logout successful"}
