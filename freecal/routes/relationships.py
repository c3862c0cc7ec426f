import logging
from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException, Query
from typing import List, Optional

from ..auth import get_current_user
from ..crud.profiles import get_profile_by_email, get_profiles_by_ids
from ..crud.relationships import (
    create_relationship,
    delete_relationship,
    find_between,
    get_relationship,
    list_relationships,
    other_party,
    set_status,
)
from ..notifications import notify_relationship_request
from ..schemas.common import MessageOut
from ..schemas.relationships import RelationshipCreateIn, RelationshipOut, RelationshipUpdateIn, UserOut

router = APIRouter()
logger = logging.getLogger('freecal.relationships')


def _out(rel, profile) -> RelationshipOut:
    out = RelationshipOut.model_validate(rel)
    out.profile = UserOut.model_validate(profile) if profile else None
    return out


@router.get('', response_model=List[RelationshipOut])
async def get_relationships(status: Optional[str] = Query(None), current_user=Depends(get_current_user)):
    """Relationships on either side, each with the other party's profile"""
    rels = await list_relationships(current_user.id, status)
    profiles = await get_profiles_by_ids(other_party(r, current_user.id) for r in rels)
    return [_out(r, profiles.get(other_party(r, current_user.id))) for r in rels]


@router.post('', response_model=RelationshipOut)
async def request_relationship(payload: RelationshipCreateIn, current_user=Depends(get_current_user)):
    if not payload.email:
        raise HTTPException(400, 'Email is required')
    target = await get_profile_by_email(payload.email)
    if not target:
        raise HTTPException(404, 'User not found')
    if target.id == current_user.id:
        raise HTTPException(400, 'Cannot add yourself')
    if await find_between(current_user.id, target.id):
        raise HTTPException(400, 'Relationship already exists')
    try:
        rel = await create_relationship(current_user.id, target.id)
    except Exception as e:
        raise HTTPException(500, f"Error creating relationship: {str(e)}")

    notify_relationship_request(target.email, current_user.display_name)
    logger.info({'msg': 'relationship_requested', 'from': str(current_user.id), 'to': str(target.id)})
    return _out(rel, target)


async def _respond(relationship_id: UUID, status: Optional[str], current_user):
    """Only the recipient of a request may accept or reject it."""
    if status not in ('accepted', 'rejected'):
        raise HTTPException(400, 'Invalid status')
    rel = await get_relationship(relationship_id)
    if not rel:
        raise HTTPException(404, 'Relationship not found')
    if rel.related_user_id != current_user.id:
        raise HTTPException(403, 'Not authorized')
    try:
        rel = await set_status(relationship_id, status)
    except Exception as e:
        raise HTTPException(500, f"Error updating relationship: {str(e)}")
    profiles = await get_profiles_by_ids([rel.user_id])
    return _out(rel, profiles.get(rel.user_id))


@router.put('/{relationship_id}', response_model=RelationshipOut)
async def update_relationship(relationship_id: UUID, payload: RelationshipUpdateIn, current_user=Depends(get_current_user)):
    return await _respond(relationship_id, payload.status, current_user)


@router.post('/{relationship_id}/accept', response_model=RelationshipOut)
async def accept_relationship(relationship_id: UUID, current_user=Depends(get_current_user)):
    return await _respond(relationship_id, 'accepted', current_user)


@router.post('/{relationship_id}/reject', response_model=RelationshipOut)
async def reject_relationship(relationship_id: UUID, current_user=Depends(get_current_user)):
    return await _respond(relationship_id, 'rejected', current_user)


@router.delete('/{relationship_id}', response_model=MessageOut)
async def remove_relationship(relationship_id: UUID, current_user=Depends(get_current_user)):
    rel = await get_relationship(relationship_id)
    if not rel:
        raise HTTPException(404, 'Relationship not found')
    if current_user.id not in (rel.user_id, rel.related_user_id):
        raise HTTPException(403, 'Not authorized')
    try:
        await delete_relationship(relationship_id)
        return MessageOut(message='Relationship deleted')
    except Exception as e:
        raise HTTPException(500, f"Error deleting relationship: {str(e)}")
