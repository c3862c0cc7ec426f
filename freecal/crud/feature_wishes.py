from sqlalchemy import select

from ..models import AsyncSessionLocal
from ..models.feature_wishes import FeatureWish


async def list_wishes():
    async with AsyncSessionLocal() as session:
        q = await session.execute(select(FeatureWish).order_by(FeatureWish.created_at.desc()))
        return q.scalars().all()


async def create_wish(title: str, created_by):
    async with AsyncSessionLocal() as session:
        wish = FeatureWish(title=title, status='pending', created_by=created_by)
        session.add(wish)
        await session.commit()
        await session.refresh(wish)
        return wish


async def set_wish_status(wish_id, status: str):
    async with AsyncSessionLocal() as session:
        q = await session.execute(select(FeatureWish).where(FeatureWish.id == wish_id))
        wish = q.scalars().first()
        if not wish:
            return None
        wish.status = status
        await session.commit()
        await session.refresh(wish)
        return wish


async def delete_wish(wish_id) -> bool:
    async with AsyncSessionLocal() as session:
        q = await session.execute(select(FeatureWish).where(FeatureWish.id == wish_id))
        wish = q.scalars().first()
        if not wish:
            return False
        await session.delete(wish)
        await session.commit()
        return True
