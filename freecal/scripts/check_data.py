"""
Inspect accounts and events from the command line.

    python -m freecal.scripts.check_data            # all profiles
    python -m freecal.scripts.check_data a@b.com    # first events of one user
"""

import asyncio
import logging
import sys

from sqlalchemy import select

from freecal.crud.profiles import get_profile_by_email, list_profiles
from freecal.models import AsyncSessionLocal, engine
from freecal.models.events import Event

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def describe_profiles() -> list:
    rows = []
    for profile in await list_profiles():
        rows.append({
            'email': profile.email,
            'display_name': profile.display_name,
            'has_password': bool(profile.password_hash),
            'approval_status': profile.approval_status,
            'is_approved': profile.is_approved,
        })
    return rows


async def first_events(email: str, limit: int = 5):
    profile = await get_profile_by_email(email)
    if not profile:
        return None
    async with AsyncSessionLocal() as session:
        q = await session.execute(
            select(Event).where(Event.user_id == profile.id).order_by(Event.start_time).limit(limit)
        )
        return [{'title': e.title, 'start_time': e.start_time.isoformat()} for e in q.scalars().all()]


async def run(argv) -> int:
    try:
        if argv:
            events = await first_events(argv[0])
            if events is None:
                logger.error(f"No profile for {argv[0]}")
                return 1
            for event in events:
                logger.info(f"{event['start_time']}  {event['title']}")
            logger.info(f"{len(events)} events shown")
        else:
            for row in await describe_profiles():
                logger.info(
                    f"{row['email']:<40} password={'yes' if row['has_password'] else 'no':<3} "
                    f"{row['approval_status']:<9} {row['display_name']}"
                )
        return 0
    finally:
        await engine.dispose()


def main():
    sys.exit(asyncio.run(run(sys.argv[1:])))


if __name__ == "__main__":
    main()
