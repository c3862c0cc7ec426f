"""
Import Routes
Create events from .ics exports and turn screenshot OCR text into drafts.
"""

import logging
from datetime import datetime, timedelta, timezone
from fastapi import APIRouter, Depends, HTTPException

from ..auth import get_current_user
from ..crud.events import build_event_views, create_event
from ..ics_parser import parse_multiple_ics
from ..ocr_parser import parse_calendar_ocr, parse_german_calendar_text, parse_ocr_text
from ..schemas.imports import ICSImportIn, ICSImportOut, OCRImportIn, ParsedEvent

router = APIRouter()
logger = logging.getLogger('freecal.import')


def parsed_to_event_fields(parsed: ParsedEvent, color: str) -> dict:
    """Map a parsed draft onto event columns; times without a zone are taken as UTC."""
    start_day = datetime.strptime(parsed.start_date, '%Y-%m-%d').replace(tzinfo=timezone.utc)
    end_day = datetime.strptime(parsed.end_date or parsed.start_date, '%Y-%m-%d').replace(tzinfo=timezone.utc)

    if parsed.is_all_day or not parsed.start_time:
        start = start_day
        end = end_day if end_day > start_day else start_day + timedelta(days=1)
    else:
        hours, minutes = (int(p) for p in parsed.start_time.split(':'))
        start = start_day + timedelta(hours=hours, minutes=minutes)
        if parsed.end_time:
            hours, minutes = (int(p) for p in parsed.end_time.split(':'))
            end = end_day + timedelta(hours=hours, minutes=minutes)
        else:
            end = start + timedelta(hours=1)
        if end < start:
            end = start + timedelta(hours=1)

    return {
        'title': parsed.title or 'Imported Event',
        'description': parsed.description,
        'location': parsed.location,
        'url': parsed.url,
        'start_time': start,
        'end_time': end,
        'is_all_day': bool(parsed.is_all_day or not parsed.start_time),
        'color': color,
        'recurrence_type': 'custom' if parsed.recurrence_rule else 'none',
        'recurrence_rule': parsed.recurrence_rule,
        'alerts': [a.model_dump() for a in parsed.alerts] if parsed.alerts else None,
        'is_tentative': parsed.is_tentative,
        'imported_from_device': True,
        'original_calendar_id': parsed.original_calendar_id,
    }


@router.post('/ics', response_model=ICSImportOut)
async def import_ics(payload: ICSImportIn, current_user=Depends(get_current_user)):
    parsed = [p for p in parse_multiple_ics(payload.content) if p.start_date]
    if not parsed:
        raise HTTPException(400, 'No events found in calendar file')
    if payload.dry_run:
        return ICSImportOut(parsed=parsed)

    color = payload.color or current_user.calendar_color
    created = []
    try:
        for item in parsed:
            created.append(await create_event(current_user.id, parsed_to_event_fields(item, color)))
    except Exception as e:
        raise HTTPException(500, f"Error importing events: {str(e)}")

    logger.info({'msg': 'ics_imported', 'user_id': str(current_user.id), 'count': len(created)})
    return ICSImportOut(parsed=parsed, created=await build_event_views(created, current_user.id))


@router.post('/ocr', response_model=ParsedEvent)
async def import_ocr(payload: OCRImportIn, current_user=Depends(get_current_user)):
    """Best effort: full screenshot heuristic first, then the simpler formats."""
    for parser in (parse_calendar_ocr, parse_german_calendar_text, parse_ocr_text):
        result = parser(payload.text)
        if result is not None:
            return result
    raise HTTPException(400, 'Could not recognise an event in the text')
