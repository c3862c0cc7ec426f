from sqlalchemy import select, or_, and_

from ..models import AsyncSessionLocal
from ..models.relationships import Relationship


def other_party(relationship, user_id):
    return relationship.related_user_id if relationship.user_id == user_id else relationship.user_id


async def get_relationship(relationship_id):
    async with AsyncSessionLocal() as session:
        q = await session.execute(select(Relationship).where(Relationship.id == relationship_id))
        return q.scalars().first()


async def list_relationships(user_id, status: str | None = None):
    async with AsyncSessionLocal() as session:
        stmt = select(Relationship).where(or_(Relationship.user_id == user_id, Relationship.related_user_id == user_id))
        if status:
            stmt = stmt.where(Relationship.status == status)
        q = await session.execute(stmt.order_by(Relationship.created_at.desc()))
        return q.scalars().all()


async def find_between(user_a, user_b):
    """Relationship between two users in either direction."""
    async with AsyncSessionLocal() as session:
        q = await session.execute(select(Relationship).where(or_(
            and_(Relationship.user_id == user_a, Relationship.related_user_id == user_b),
            and_(Relationship.user_id == user_b, Relationship.related_user_id == user_a),
        )))
        return q.scalars().first()


async def connected_user_ids(user_id) -> set:
    return {other_party(r, user_id) for r in await list_relationships(user_id, 'accepted')}


async def create_relationship(user_id, related_user_id):
    async with AsyncSessionLocal() as session:
        rel = Relationship(user_id=user_id, related_user_id=related_user_id, status='pending')
        session.add(rel)
        await session.commit()
        await session.refresh(rel)
        return rel


async def set_status(relationship_id, status: str):
    async with AsyncSessionLocal() as session:
        q = await session.execute(select(Relationship).where(Relationship.id == relationship_id))
        rel = q.scalars().first()
        if not rel:
            return None
        rel.status = status
        await session.commit()
        await session.refresh(rel)
        return rel


async def delete_relationship(relationship_id) -> bool:
    async with AsyncSessionLocal() as session:
        q = await session.execute(select(Relationship).where(Relationship.id == relationship_id))
        rel = q.scalars().first()
        if not rel:
            return False
        await session.delete(rel)
        await session.commit()
        return True
