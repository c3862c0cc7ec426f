import secrets
import uuid
from datetime import datetime, timedelta, timezone

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import jwt, JWTError
from passlib.context import CryptContext

from .config import (
    ACCESS_TOKEN_EXPIRE_MINUTES,
    ADMIN_EMAIL,
    BCRYPT_ROUNDS,
    JWT_ALGORITHM as ALGORITHM,
    JWT_SECRET as SECRET,
)

pwd_ctx = CryptContext(schemes=['bcrypt'], deprecated='auto', bcrypt__rounds=BCRYPT_ROUNDS)
security = HTTPBearer(auto_error=False)


def hash_password(password: str) -> str:
    return pwd_ctx.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return pwd_ctx.verify(password, password_hash)
    except ValueError:
        # malformed hash imported from another auth provider
        return False


def generate_reset_token() -> str:
    # 32 random bytes, hex encoded
    return secrets.token_hex(32)


def create_access_token(data: dict, expires_delta: timedelta = None):
    to_encode = {k: str(v) if isinstance(v, uuid.UUID) else v for k, v in data.items()}
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({'exp': expire})
    encoded = jwt.encode(to_encode, SECRET, algorithm=ALGORITHM)
    return encoded


def decode_token(token: str):
    try:
        payload = jwt.decode(token, SECRET, algorithms=[ALGORITHM])
        return payload
    except JWTError:
        return None


def is_admin(profile) -> bool:
    return bool(profile and profile.email and profile.email.lower() == ADMIN_EMAIL)


async def get_current_user(credentials: HTTPAuthorizationCredentials = Depends(security)):
    """Resolve the bearer token to a Profile row, or 401."""
    # crud.profiles imports this module
    from .crud.profiles import get_profile_by_id

    if credentials is None:
        raise HTTPException(401, 'Not authenticated')
    payload = decode_token(credentials.credentials)
    if not payload or not payload.get('id'):
        raise HTTPException(401, 'Invalid or expired token')
    try:
        user_id = uuid.UUID(str(payload['id']))
    except ValueError:
        raise HTTPException(401, 'Invalid or expired token')
    profile = await get_profile_by_id(user_id)
    if not profile:
        raise HTTPException(401, 'User no longer exists')
    return profile


async def require_admin(current_user=Depends(get_current_user)):
    if not is_admin(current_user):
        raise HTTPException(403, 'Admin access required')
    return current_user
