import os
import tempfile
import uuid
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Configure test environment before the app reads its settings
TEST_DB = Path(tempfile.gettempdir()) / f"freecal-test-{os.getpid()}.db"
os.environ['DATABASE_URL'] = f"sqlite+aiosqlite:///{TEST_DB}"
os.environ['JWT_SECRET'] = 'test-secret'
os.environ['ADMIN_EMAIL'] = 'admin@example.com'
os.environ['BCRYPT_ROUNDS'] = '4'
os.environ['KEEP_ALIVE_INTERVAL_SECONDS'] = '0'
os.environ['ENVIRONMENT'] = 'test'

ADMIN_EMAIL = 'admin@example.com'


@pytest_asyncio.fixture
async def client():
    from freecal.main import app
    from freecal.models import Base, engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def make_user(client):
    """Register a user through the API and return its token, profile and auth headers."""
    async def _make(display_name: str = 'Test User', email: str | None = None, password: str = 'secret123'):
        email = email or f"user_{uuid.uuid4().hex[:8]}@example.com"
        r = await client.post('/api/auth/register', json={
            'email': email,
            'password': password,
            'displayName': display_name,
        })
        assert r.status_code == 200, r.text
        data = r.json()
        return {
            'token': data['token'],
            'user': data['user'],
            'id': data['user']['id'],
            'email': email,
            'password': password,
            'headers': {'Authorization': f"Bearer {data['token']}"},
        }
    return _make


@pytest.fixture
def connect(client):
    """Create an accepted relationship between two users made by make_user."""
    async def _connect(requester: dict, recipient: dict):
        r = await client.post('/api/relationships', json={'email': recipient['email']}, headers=requester['headers'])
        assert r.status_code == 200, r.text
        rel_id = r.json()['id']
        r = await client.put(f'/api/relationships/{rel_id}', json={'status': 'accepted'}, headers=recipient['headers'])
        assert r.status_code == 200, r.text
        return rel_id
    return _connect
