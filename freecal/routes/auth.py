"""
Authentication Routes
Registration, login, the current profile and the password reset flow.
"""

import logging
from datetime import datetime, timedelta, timezone

from fastapi import APIRouter, Depends, HTTPException

from ..auth import create_access_token, get_current_user, verify_password
from ..calendar_utils import as_utc
from ..config import REGISTER_TOKEN_EXPIRE_MINUTES
from ..crud.profiles import (
    complete_password_reset,
    create_profile,
    get_profile_by_email,
    get_profile_by_reset_token,
    issue_reset_token,
)
from ..notifications import notify_admin_new_user, notify_password_reset
from ..schemas.common import MessageOut
from ..schemas.users import ForgotPasswordIn, LoginIn, RegisterIn, ResetPasswordIn, TokenOut, UserOut

router = APIRouter()
logger = logging.getLogger('freecal.auth')

RESET_REQUESTED_MESSAGE = 'If an account exists with this email, a reset link has been sent.'


def _token_for(profile, expires_delta: timedelta = None) -> str:
    return create_access_token({'id': profile.id, 'email': profile.email}, expires_delta)


@router.post('/register', response_model=TokenOut)
async def register(payload: RegisterIn):
    if await get_profile_by_email(payload.email):
        raise HTTPException(400, 'User already exists')
    try:
        profile = await create_profile(payload.email, payload.password, payload.display_name)
    except Exception as e:
        raise HTTPException(500, f"Error registering user: {str(e)}")

    notify_admin_new_user(profile.email, profile.display_name)
    logger.info({'msg': 'user_registered', 'user_id': str(profile.id)})
    token = _token_for(profile, timedelta(minutes=REGISTER_TOKEN_EXPIRE_MINUTES))
    return TokenOut(token=token, user=UserOut.model_validate(profile))


@router.post('/login', response_model=TokenOut)
async def login(payload: LoginIn):
    profile = await get_profile_by_email(payload.email)
    if not profile:
        logger.info({'msg': 'login_failed', 'reason': 'unknown_email'})
        raise HTTPException(400, 'User not found')
    if not profile.password_hash:
        logger.info({'msg': 'login_failed', 'reason': 'no_password', 'user_id': str(profile.id)})
        raise HTTPException(401, 'User has no password set (migrated account?). Please reset password.')
    if not verify_password(payload.password, profile.password_hash):
        logger.info({'msg': 'login_failed', 'reason': 'bad_password', 'user_id': str(profile.id)})
        raise HTTPException(401, 'Invalid credentials')
    return TokenOut(token=_token_for(profile), user=UserOut.model_validate(profile))


@router.get('/me', response_model=UserOut)
async def me(current_user=Depends(get_current_user)):
    return current_user


@router.post('/forgot-password', response_model=MessageOut)
async def forgot_password(payload: ForgotPasswordIn):
    """Always answers the same way so account existence is not revealed."""
    if not payload.email:
        raise HTTPException(400, 'Email is required')
    profile = await issue_reset_token(payload.email)
    if profile:
        notify_password_reset(profile.email, profile.reset_token)
    return MessageOut(message=RESET_REQUESTED_MESSAGE)


@router.post('/reset-password', response_model=MessageOut)
async def reset_password(payload: ResetPasswordIn):
    if not payload.token or not payload.new_password:
        raise HTTPException(400, 'Token and new password are required')
    if len(payload.new_password) < 6:
        raise HTTPException(400, 'Password must be at least 6 characters')
    profile = await get_profile_by_reset_token(payload.token)
    if not profile:
        raise HTTPException(400, 'Invalid or expired token')
    if not profile.reset_token_expires or as_utc(profile.reset_token_expires) < datetime.now(timezone.utc):
        raise HTTPException(400, 'Token has expired')
    await complete_password_reset(profile.id, payload.new_password)
    logger.info({'msg': 'password_reset', 'user_id': str(profile.id)})
    return MessageOut(message='Password has been reset successfully')
