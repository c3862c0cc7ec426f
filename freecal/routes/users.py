from fastapi import APIRouter, Depends, HTTPException, Query
from typing import Optional

from ..auth import get_current_user
from ..crud.profiles import get_profile_by_email, update_profile
from ..schemas.users import ProfileUpdateIn, UserOut

router = APIRouter()


@router.put('/profile', response_model=UserOut)
async def update_my_profile(payload: ProfileUpdateIn, current_user=Depends(get_current_user)):
    """Update display name, calendar colour or avatar"""
    updates = payload.model_dump(exclude_unset=True, exclude_none=True)
    if 'display_name' in updates:
        updates['display_name'] = updates['display_name'].strip()
        if not updates['display_name']:
            raise HTTPException(400, "Display name cannot be empty")
    if not updates:
        return current_user
    try:
        profile = await update_profile(current_user.id, **updates)
        if not profile:
            raise HTTPException(404, "User not found")
        return profile
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(500, f"Failed to update profile: {str(e)}")


@router.get('/search', response_model=UserOut)
async def search_user(email: Optional[str] = Query(None), current_user=Depends(get_current_user)):
    if not email:
        raise HTTPException(400, 'Email query parameter is required')
    profile = await get_profile_by_email(email)
    if not profile:
        raise HTTPException(404, 'User not found')
    return profile
