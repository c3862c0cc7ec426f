from datetime import datetime

import pytest


def parse(value: str) -> datetime:
    return datetime.fromisoformat(value.replace('Z', '+00:00'))


class TestCalendarAPI:

    @pytest.mark.asyncio
    async def test_range_expands_recurring_events(self, client, make_user):
        user = await make_user()
        await client.post('/api/events', json={
            'title': 'Standup',
            'start_time': '2024-01-01T09:00:00Z',
            'end_time': '2024-01-01T09:15:00Z',
            'recurrence_type': 'weekly',
        }, headers=user['headers'])
        await client.post('/api/events', json={
            'title': 'Dentist',
            'start_time': '2024-01-10T14:00:00Z',
            'end_time': '2024-01-10T15:00:00Z',
        }, headers=user['headers'])
        await client.post('/api/events', json={
            'title': 'Later',
            'start_time': '2024-03-01T14:00:00Z',
            'end_time': '2024-03-01T15:00:00Z',
        }, headers=user['headers'])

        r = await client.get('/api/calendar/range', params={
            'start': '2024-01-01T00:00:00Z', 'end': '2024-01-20T00:00:00Z',
        }, headers=user['headers'])
        assert r.status_code == 200, r.text
        items = r.json()
        assert [i['title'] for i in items] == ['Standup', 'Standup', 'Dentist', 'Standup']
        starts = [parse(i['start_time']) for i in items]
        assert starts == sorted(starts)
        series = [i for i in items if i['title'] == 'Standup']
        assert len({i['id'] for i in series}) == 3
        assert all(i['event_id'] == series[0]['event_id'] for i in series)
        dentist = items[2]
        assert dentist['id'] == dentist['event_id']

    @pytest.mark.asyncio
    async def test_range_validation(self, client, make_user):
        user = await make_user()
        r = await client.get('/api/calendar/range', params={
            'start': '2024-02-01T00:00:00Z', 'end': '2024-01-01T00:00:00Z',
        }, headers=user['headers'])
        assert r.status_code == 400
        r = await client.get('/api/calendar/range', headers=user['headers'])
        assert r.status_code == 422

    @pytest.mark.asyncio
    async def test_month_grid(self, client, make_user):
        user = await make_user()
        await client.post('/api/events', json={
            'title': 'Holiday',
            'start_time': '2024-02-14T00:00:00Z',
            'end_time': '2024-02-16T00:00:00Z',
            'is_all_day': True,
        }, headers=user['headers'])

        r = await client.get('/api/calendar/month', params={'year': 2024, 'month': 2}, headers=user['headers'])
        assert r.status_code == 200, r.text
        data = r.json()
        assert data['month_name'] == 'February'
        days = data['days']
        # February 2024 starts on a Thursday
        assert days[:3] == [None, None, None]
        assert len(days) == 3 + 29
        by_date = {d['date']: d for d in days if d}
        assert [e['title'] for e in by_date['2024-02-14']['events']] == ['Holiday']
        assert [e['title'] for e in by_date['2024-02-15']['events']] == ['Holiday']
        assert by_date['2024-02-16']['events'] == []

    @pytest.mark.asyncio
    async def test_month_validation(self, client, make_user):
        user = await make_user()
        r = await client.get('/api/calendar/month', params={'year': 2024, 'month': 13}, headers=user['headers'])
        assert r.status_code == 422
