from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException
from typing import List

from ..auth import get_current_user, require_admin
from ..crud.feature_wishes import create_wish, delete_wish, list_wishes, set_wish_status
from ..models.feature_wishes import WISH_STATUSES
from ..schemas.common import MessageOut
from ..schemas.feature_wishes import WishCreateIn, WishOut, WishStatusIn

router = APIRouter()


@router.get('', response_model=List[WishOut])
async def get_wishes(current_user=Depends(get_current_user)):
    return await list_wishes()


@router.post('', response_model=WishOut, status_code=201)
async def add_wish(payload: WishCreateIn, admin=Depends(require_admin)):
    title = (payload.title or '').strip()
    if not title:
        raise HTTPException(400, 'Title is required')
    try:
        return await create_wish(title, admin.id)
    except Exception as e:
        raise HTTPException(500, f"Failed to create wish: {str(e)}")


@router.put('/{wish_id}/status', response_model=WishOut)
async def update_wish_status(wish_id: UUID, payload: WishStatusIn, admin=Depends(require_admin)):
    if payload.status not in WISH_STATUSES:
        raise HTTPException(400, 'Invalid status')
    wish = await set_wish_status(wish_id, payload.status)
    if not wish:
        raise HTTPException(404, 'Wish not found')
    return wish


@router.delete('/{wish_id}', response_model=MessageOut)
async def remove_wish(wish_id: UUID, admin=Depends(require_admin)):
    if not await delete_wish(wish_id):
        raise HTTPException(404, 'Wish not found')
    return MessageOut(message='Wish deleted')
