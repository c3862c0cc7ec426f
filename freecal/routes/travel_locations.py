from uuid import UUID
from fastapi import APIRouter, Depends, HTTPException
from typing import List

from ..auth import get_current_user
from ..config import DEFAULT_CALENDAR_COLOR
from ..crud.profiles import get_profiles_by_ids
from ..crud.travel_locations import (
    create_location,
    delete_location,
    list_locations_for,
    location_to_dict,
    update_location,
)
from ..schemas.common import MessageOut
from ..schemas.travel_locations import TravelLocationIn, TravelLocationOut, TravelLocationUpdateIn

router = APIRouter()


async def _check_companion(user_id):
    if user_id is not None and not await get_profiles_by_ids([user_id]):
        raise HTTPException(400, 'Tagged user does not exist')


@router.get('', response_model=List[TravelLocationOut])
async def get_locations(current_user=Depends(get_current_user)):
    """Own pins plus pins where the user is tagged as travel companion"""
    try:
        locations = await list_locations_for(current_user.id)
        profiles = await get_profiles_by_ids(
            [loc.user_id for loc in locations] + [loc.with_relationship_id for loc in locations]
        )
    except Exception as e:
        raise HTTPException(500, f"Failed to fetch locations: {str(e)}")

    results = []
    for loc in locations:
        owner = profiles.get(loc.user_id)
        companion = profiles.get(loc.with_relationship_id)
        results.append({
            **location_to_dict(loc),
            'is_own': loc.user_id == current_user.id,
            'owner_name': owner.display_name if owner else 'Unknown',
            'owner_color': owner.calendar_color if owner else DEFAULT_CALENDAR_COLOR,
            'with_relationship_name': companion.display_name if companion else None,
        })
    return results


@router.post('', response_model=TravelLocationOut, status_code=201)
async def add_location(payload: TravelLocationIn, current_user=Depends(get_current_user)):
    if not payload.name or payload.latitude is None or payload.longitude is None:
        raise HTTPException(400, 'Name, latitude and longitude are required')
    await _check_companion(payload.with_relationship_id)
    try:
        location = await create_location(current_user.id, payload.model_dump())
    except Exception as e:
        raise HTTPException(500, f"Failed to create location: {str(e)}")
    return {**location_to_dict(location), 'is_own': True}


@router.put('/{location_id}', response_model=TravelLocationOut)
async def edit_location(location_id: UUID, payload: TravelLocationUpdateIn, current_user=Depends(get_current_user)):
    fields = payload.model_dump(exclude_unset=True)
    for key in ('name', 'latitude', 'longitude', 'is_wishlist'):
        if key in fields and fields[key] is None:
            raise HTTPException(400, f'{key} cannot be null')
    await _check_companion(fields.get('with_relationship_id'))
    try:
        location = await update_location(location_id, current_user.id, fields)
    except Exception as e:
        raise HTTPException(500, f"Failed to update location: {str(e)}")
    if not location:
        raise HTTPException(404, 'Location not found')
    return {**location_to_dict(location), 'is_own': True}


@router.delete('/{location_id}', response_model=MessageOut)
async def remove_location(location_id: UUID, current_user=Depends(get_current_user)):
    try:
        deleted = await delete_location(location_id, current_user.id)
    except Exception as e:
        raise HTTPException(500, f"Failed to delete location: {str(e)}")
    if not deleted:
        raise HTTPException(404, 'Location not found')
    return MessageOut(message='Location deleted')
