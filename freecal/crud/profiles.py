from datetime import datetime, timedelta, timezone
from sqlalchemy import select, func

from ..models import AsyncSessionLocal
from ..models.profiles import Profile
from ..auth import hash_password, generate_reset_token
from ..config import RESET_TOKEN_TTL_MINUTES


def normalize_email(email: str) -> str:
    return (email or '').strip().lower()


async def get_profile_by_id(user_id):
    async with AsyncSessionLocal() as session:
        q = await session.execute(select(Profile).where(Profile.id == user_id))
        return q.scalars().first()


async def get_profile_by_email(email: str):
    async with AsyncSessionLocal() as session:
        q = await session.execute(select(Profile).where(func.lower(Profile.email) == normalize_email(email)))
        return q.scalars().first()


async def get_profiles_by_ids(user_ids) -> dict:
    ids = {uid for uid in user_ids if uid is not None}
    if not ids:
        return {}
    async with AsyncSessionLocal() as session:
        q = await session.execute(select(Profile).where(Profile.id.in_(ids)))
        return {p.id: p for p in q.scalars().all()}


async def list_profiles():
    async with AsyncSessionLocal() as session:
        q = await session.execute(select(Profile).order_by(Profile.created_at.desc()))
        return q.scalars().all()


async def create_profile(email: str, password: str, display_name: str):
    async with AsyncSessionLocal() as session:
        profile = Profile(
            email=normalize_email(email),
            password_hash=hash_password(password),
            display_name=display_name.strip(),
        )
        session.add(profile)
        await session.commit()
        await session.refresh(profile)
        return profile


async def update_profile(user_id, **fields):
    async with AsyncSessionLocal() as session:
        q = await session.execute(select(Profile).where(Profile.id == user_id))
        profile = q.scalars().first()
        if not profile:
            return None
        for key, value in fields.items():
            setattr(profile, key, value)
        await session.commit()
        await session.refresh(profile)
        return profile


async def set_approval(user_id, approved_by, approval_status=None, is_approved=None):
    """Apply an admin decision; approved_at/approved_by follow is_approved."""
    async with AsyncSessionLocal() as session:
        q = await session.execute(select(Profile).where(Profile.id == user_id))
        profile = q.scalars().first()
        if not profile:
            return None
        if approval_status is not None:
            profile.approval_status = approval_status
            if is_approved is None:
                is_approved = approval_status == 'approved'
        if is_approved is not None:
            profile.is_approved = is_approved
            if is_approved and approval_status is None:
                profile.approval_status = 'approved'
        if profile.is_approved:
            profile.approved_at = profile.approved_at or datetime.now(timezone.utc)
            profile.approved_by = approved_by
        else:
            profile.approved_at = None
            profile.approved_by = None
        await session.commit()
        await session.refresh(profile)
        return profile


async def set_password(user_id, password: str):
    return await update_profile(user_id, password_hash=hash_password(password))


async def delete_profile(user_id) -> bool:
    async with AsyncSessionLocal() as session:
        q = await session.execute(select(Profile).where(Profile.id == user_id))
        profile = q.scalars().first()
        if not profile:
            return False
        await session.delete(profile)
        await session.commit()
        return True


async def issue_reset_token(email: str):
    """Store a fresh reset token for the account; None when there is no such account."""
    async with AsyncSessionLocal() as session:
        q = await session.execute(select(Profile).where(func.lower(Profile.email) == normalize_email(email)))
        profile = q.scalars().first()
        if not profile:
            return None
        profile.reset_token = generate_reset_token()
        profile.reset_token_expires = datetime.now(timezone.utc) + timedelta(minutes=RESET_TOKEN_TTL_MINUTES)
        await session.commit()
        await session.refresh(profile)
        return profile


async def get_profile_by_reset_token(token: str):
    async with AsyncSessionLocal() as session:
        q = await session.execute(select(Profile).where(Profile.reset_token == token))
        return q.scalars().first()


async def complete_password_reset(user_id, new_password: str):
    return await update_profile(
        user_id,
        password_hash=hash_password(new_password),
        reset_token=None,
        reset_token_expires=None,
    )
