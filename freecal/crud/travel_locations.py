from sqlalchemy import select

from ..models import AsyncSessionLocal
from ..models.travel_locations import TravelLocation


def location_to_dict(location) -> dict:
    return {c.name: getattr(location, c.name) for c in TravelLocation.__table__.columns}


async def list_locations_for(user_id) -> list:
    """Own locations first, then those the user is tagged in; newest first within each."""
    async with AsyncSessionLocal() as session:
        own = await session.execute(
            select(TravelLocation).where(TravelLocation.user_id == user_id).order_by(TravelLocation.created_at.desc())
        )
        tagged = await session.execute(
            select(TravelLocation).where(TravelLocation.with_relationship_id == user_id).order_by(TravelLocation.created_at.desc())
        )
        locations = list(own.scalars().all())
        seen = {loc.id for loc in locations}
        for loc in tagged.scalars().all():
            if loc.id not in seen:
                locations.append(loc)
                seen.add(loc.id)
        return locations


async def create_location(user_id, fields: dict):
    async with AsyncSessionLocal() as session:
        location = TravelLocation(user_id=user_id, **fields)
        session.add(location)
        await session.commit()
        await session.refresh(location)
        return location


async def update_location(location_id, user_id, fields: dict):
    async with AsyncSessionLocal() as session:
        q = await session.execute(select(TravelLocation).where(
            TravelLocation.id == location_id, TravelLocation.user_id == user_id
        ))
        location = q.scalars().first()
        if not location:
            return None
        for key, value in fields.items():
            setattr(location, key, value)
        await session.commit()
        await session.refresh(location)
        return location


async def delete_location(location_id, user_id) -> bool:
    async with AsyncSessionLocal() as session:
        q = await session.execute(select(TravelLocation).where(
            TravelLocation.id == location_id, TravelLocation.user_id == user_id
        ))
        location = q.scalars().first()
        if not location:
            return False
        await session.delete(location)
        await session.commit()
        return True
