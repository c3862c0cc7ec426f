import uuid
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import delete, select, update

from freecal.auth import create_access_token, decode_token


class TestAuthAPI:
    """Registration, login and the password reset flow"""

    @pytest.mark.asyncio
    async def test_register_returns_token_and_user(self, client):
        email = f"new_{uuid.uuid4().hex[:8]}@example.com"
        r = await client.post('/api/auth/register', json={
            'email': email, 'password': 'secret1', 'displayName': 'New User'
        })
        assert r.status_code == 200, r.text
        data = r.json()
        assert data['token']
        assert data['user']['email'] == email
        assert data['user']['display_name'] == 'New User'
        assert data['user']['is_approved'] is False
        assert data['user']['approval_status'] == 'pending'
        assert data['user']['calendar_color'] == 'hsl(217, 91%, 60%)'
        assert 'password_hash' not in data['user']
        assert decode_token(data['token'])['email'] == email

    @pytest.mark.asyncio
    async def test_register_accepts_snake_case_display_name(self, client):
        r = await client.post('/api/auth/register', json={
            'email': f"snake_{uuid.uuid4().hex[:8]}@example.com", 'password': 'secret1', 'display_name': 'Snake'
        })
        assert r.status_code == 200, r.text
        assert r.json()['user']['display_name'] == 'Snake'

    @pytest.mark.asyncio
    async def test_register_duplicate_email(self, client, make_user):
        user = await make_user()
        r = await client.post('/api/auth/register', json={
            'email': user['email'].upper(), 'password': 'secret1', 'displayName': 'Again'
        })
        assert r.status_code == 400
        assert r.json()['detail'] == 'User already exists'

    @pytest.mark.asyncio
    async def test_register_validation(self, client):
        r = await client.post('/api/auth/register', json={
            'email': 'short@example.com', 'password': '123', 'displayName': 'Short'
        })
        assert r.status_code == 422
        r = await client.post('/api/auth/register', json={
            'email': 'not-an-email', 'password': 'secret1', 'displayName': 'Bad'
        })
        assert r.status_code == 422

    @pytest.mark.asyncio
    async def test_login_and_me(self, client, make_user):
        user = await make_user(display_name='Login Person')
        r = await client.post('/api/auth/login', json={'email': user['email'], 'password': user['password']})
        assert r.status_code == 200, r.text
        token = r.json()['token']

        me = await client.get('/api/auth/me', headers={'Authorization': f'Bearer {token}'})
        assert me.status_code == 200
        assert me.json()['id'] == user['id']
        assert me.json()['display_name'] == 'Login Person'

    @pytest.mark.asyncio
    async def test_login_failures(self, client, make_user):
        user = await make_user()
        r = await client.post('/api/auth/login', json={'email': 'nobody@example.com', 'password': 'whatever'})
        assert r.status_code == 400
        assert r.json()['detail'] == 'User not found'

        r = await client.post('/api/auth/login', json={'email': user['email'], 'password': 'wrong-password'})
        assert r.status_code == 401
        assert r.json()['detail'] == 'Invalid credentials'

    @pytest.mark.asyncio
    async def test_login_without_password_hash(self, client, make_user):
        from freecal.models import AsyncSessionLocal
        from freecal.models.profiles import Profile

        user = await make_user()
        async with AsyncSessionLocal() as session:
            await session.execute(update(Profile).where(Profile.id == uuid.UUID(user['id'])).values(password_hash=None))
            await session.commit()

        r = await client.post('/api/auth/login', json={'email': user['email'], 'password': user['password']})
        assert r.status_code == 401
        assert 'reset password' in r.json()['detail']

    @pytest.mark.asyncio
    async def test_me_requires_valid_token(self, client, make_user):
        r = await client.get('/api/auth/me')
        assert r.status_code == 401
        r = await client.get('/api/auth/me', headers={'Authorization': 'Bearer garbage'})
        assert r.status_code == 401

        user = await make_user()
        expired = create_access_token({'id': user['id'], 'email': user['email']}, timedelta(minutes=-1))
        r = await client.get('/api/auth/me', headers={'Authorization': f'Bearer {expired}'})
        assert r.status_code == 401

    @pytest.mark.asyncio
    async def test_me_after_profile_deleted(self, client, make_user):
        from freecal.models import AsyncSessionLocal
        from freecal.models.profiles import Profile

        user = await make_user()
        async with AsyncSessionLocal() as session:
            await session.execute(delete(Profile).where(Profile.id == uuid.UUID(user['id'])))
            await session.commit()

        r = await client.get('/api/auth/me', headers=user['headers'])
        assert r.status_code == 401


class TestPasswordReset:

    @pytest.mark.asyncio
    async def test_forgot_password_is_generic(self, client, make_user):
        user = await make_user()
        known = await client.post('/api/auth/forgot-password', json={'email': user['email']})
        unknown = await client.post('/api/auth/forgot-password', json={'email': 'ghost@example.com'})
        assert known.status_code == 200
        assert unknown.status_code == 200
        assert known.json() == unknown.json()
        assert known.json()['message'] == 'If an account exists with this email, a reset link has been sent.'

        missing = await client.post('/api/auth/forgot-password', json={})
        assert missing.status_code == 400

    @pytest.mark.asyncio
    async def test_reset_password_flow(self, client, make_user):
        from freecal.models import AsyncSessionLocal
        from freecal.models.profiles import Profile

        user = await make_user()
        await client.post('/api/auth/forgot-password', json={'email': user['email']})
        async with AsyncSessionLocal() as session:
            q = await session.execute(select(Profile).where(Profile.id == uuid.UUID(user['id'])))
            token = q.scalars().first().reset_token
        assert token and len(token) == 64

        r = await client.post('/api/auth/reset-password', json={'token': token, 'newPassword': 'brandnew1'})
        assert r.status_code == 200, r.text

        r = await client.post('/api/auth/login', json={'email': user['email'], 'password': 'brandnew1'})
        assert r.status_code == 200
        r = await client.post('/api/auth/login', json={'email': user['email'], 'password': user['password']})
        assert r.status_code == 401

        # token is single use
        r = await client.post('/api/auth/reset-password', json={'token': token, 'newPassword': 'another1'})
        assert r.status_code == 400
        assert r.json()['detail'] == 'Invalid or expired token'

    @pytest.mark.asyncio
    async def test_reset_password_errors(self, client, make_user):
        from freecal.models import AsyncSessionLocal
        from freecal.models.profiles import Profile

        r = await client.post('/api/auth/reset-password', json={'token': 'abc'})
        assert r.status_code == 400
        r = await client.post('/api/auth/reset-password', json={'token': 'nope', 'new_password': 'secret12'})
        assert r.status_code == 400
        assert r.json()['detail'] == 'Invalid or expired token'

        user = await make_user()
        async with AsyncSessionLocal() as session:
            await session.execute(update(Profile).where(Profile.id == uuid.UUID(user['id'])).values(
                reset_token='expiredtoken',
                reset_token_expires=datetime.now(timezone.utc) - timedelta(minutes=5),
            ))
            await session.commit()
        r = await client.post('/api/auth/reset-password', json={'token': 'expiredtoken', 'newPassword': 'secret12'})
        assert r.status_code == 400
        assert r.json()['detail'] == 'Token has expired'
