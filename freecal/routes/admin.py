"""
Admin Routes
Account approval and user management, restricted to the configured admin email.
"""

import logging
from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException
from typing import List

from ..auth import require_admin
from ..crud.profiles import delete_profile, list_profiles, set_approval, set_password
from ..notifications import notify_user_approved
from ..schemas.common import MessageOut
from ..schemas.users import AdminPasswordIn, AdminUserUpdateIn, UserOut

router = APIRouter()
logger = logging.getLogger('freecal.admin')


@router.get('/users', response_model=List[UserOut])
async def all_users(admin=Depends(require_admin)):
    return await list_profiles()


@router.put('/users/{user_id}', response_model=UserOut)
async def update_user(user_id: UUID, payload: AdminUserUpdateIn, admin=Depends(require_admin)):
    if payload.approval_status is not None and payload.is_approved is not None:
        if (payload.approval_status == 'approved') != payload.is_approved:
            raise HTTPException(400, 'approval_status and is_approved disagree')
    try:
        profile = await set_approval(user_id, admin.id, payload.approval_status, payload.is_approved)
        if not profile:
            raise HTTPException(404, 'User not found')
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(500, f"Error updating user: {str(e)}")

    if profile.is_approved:
        notify_user_approved(profile.email, profile.display_name)
    logger.info({'msg': 'user_approval_changed', 'user_id': str(user_id), 'status': profile.approval_status})
    return profile


@router.put('/users/{user_id}/password', response_model=MessageOut)
async def update_user_password(user_id: UUID, payload: AdminPasswordIn, admin=Depends(require_admin)):
    if not payload.password or len(payload.password) < 6:
        raise HTTPException(400, 'Password must be at least 6 characters')
    try:
        profile = await set_password(user_id, payload.password)
        if not profile:
            raise HTTPException(404, 'User not found')
        return MessageOut(message='Password updated')
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(500, f"Error updating password: {str(e)}")


@router.delete('/users/{user_id}', response_model=MessageOut)
async def delete_user(user_id: UUID, admin=Depends(require_admin)):
    if user_id == admin.id:
        raise HTTPException(400, 'Cannot delete your own account')
    try:
        if not await delete_profile(user_id):
            raise HTTPException(404, 'User not found')
        logger.info({'msg': 'user_deleted', 'user_id': str(user_id)})
        return MessageOut(message='User deleted')
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(500, f"Error deleting user: {str(e)}")
