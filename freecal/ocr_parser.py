"""
Heuristics for turning OCR text of calendar screenshots (mostly iOS, German
and English UI) into ParsedEvent drafts. The OCR step itself runs on the
device; only the recognised text reaches the server.
"""

import logging
import re
from typing import List, Optional

from .schemas.imports import ParsedEvent

logger = logging.getLogger('freecal.import')

MONTHS = {
    'jan': '01', 'feb': '02', 'mär': '03', 'mar': '03', 'apr': '04',
    'mai': '05', 'may': '05', 'jun': '06', 'jul': '07', 'aug': '08',
    'sep': '09', 'okt': '10', 'oct': '10', 'nov': '11', 'dez': '12', 'dec': '12',
}

GERMAN_DATE = re.compile(r'(\d{1,2})\.\s*(\w{3})\.\s*(\d{4})', re.IGNORECASE)
NAMED_MONTH_DATE = re.compile(r'(?<!\d)(\d{1,2})\.?\s*([A-Za-zÄÖÜäöü]{3})[A-Za-zäöü]*\.?,?\s*(\d{4})')
NUMERIC_DATE = re.compile(r'(?<!\d)(\d{1,2})[./-](\d{1,2})[./-](\d{4})')
TIME_12H = re.compile(r'(\d{1,2}):(\d{2})\s*(AM|PM)?', re.IGNORECASE)
TIME_RANGE = re.compile(r'(\d{1,2}):(\d{2})\s*[-–]\s*(\d{1,2}):(\d{2})')
MULTI_DAY_TIMES = re.compile(r'von\s+(\d{1,2}):(\d{2}).*?bis\s+(\d{1,2}):(\d{2})', re.IGNORECASE)
DOMAIN_PIPE = re.compile(r'\.(de|com|org|net)\s*\|')
VENUE = re.compile(r'(Arena|Stadium|Stadion|Halle|Hall|Center|Centre|Platz)', re.IGNORECASE)
TEAM_PREFIX = re.compile(r'^(Hannover 96|FC |SC |TSV |SV )', re.IGNORECASE)
CALENDAR_NAME = re.compile(r'Kalender.*?(Privat|Private|Work|Arbeit|Personal)', re.IGNORECASE)
URL = re.compile(r'(https?://\S+)')

LOCATION_KEYWORDS = ['Ort:', 'Location:', 'Raum:', 'Room:']
NOTES_KEYWORDS = ['Hinweis:', 'Notes:', 'Notizen:', 'Bemerkung:']
ALL_DAY_MARKERS = ['Ganztägig', 'All-day', 'den ganzen Tag']
TENTATIVE_MARKERS = ['tentativ', 'Tentative', 'vielleicht']

# screen furniture that OCR picks up around the event details
SKIP_PATTERNS = [re.compile(p, re.IGNORECASE) for p in (
    r'^\d{1,2}:\d{2}',
    r'^<',
    r'^[<>◀▶←→]+',
    r'^(Dezember|December|Januar|January|Februar|February|März|March|April|Mai|May|Juni|June|Juli|July|August|September|Oktober|October|November)\b',
    r'^(Bearbeiten|Edit|Kalender|Calendar|Hinweis|Notes|Note|Notizen|Ort|Location|URL)$',
    r'^(Privat|Private|Work|Arbeit|Ohne|None)$',
    r'^[📅🔔⏰]+$',
    r'^\d{1,2}%$',
    r'^(von|bis|from|to|am)$',
    r'^(Ereignis löschen|Delete Event|Abbrechen|Cancel|Kalenderabo beenden|Mehr anzeigen)$',
)]

# lines where the date/time block starts and the title ends
DETAIL_PATTERNS = [re.compile(p, re.IGNORECASE) for p in (
    r'^(Montag|Dienstag|Mittwoch|Donnerstag|Freitag|Samstag|Sonntag|Monday|Tuesday|Wednesday|Thursday|Friday|Saturday|Sunday)',
    r'^(Mo|Di|Mi|Do|Fr|Sa|So|Mon|Tue|Wed|Thu|Fri|Sat|Sun)\.?,?\s+\d{1,2}',
    r'^von\s+\d{1,2}:\d{2}',
    r'^\d{1,2}\.\s*(Jan|Feb|Mär|Mar|Apr|Mai|May|Jun|Jul|Aug|Sep|Okt|Oct|Nov|Dez|Dec)',
    r'^\d{1,2}:\d{2}\s*[-–]\s*\d{1,2}:\d{2}',
    r'^(Ganztägig|All-day)',
)]

TITLE_CHARS = re.compile(r'[a-zA-ZäöüÄÖÜß0-9]')


def _lines(text: str) -> List[str]:
    return [line.strip() for line in text.splitlines() if line.strip()]


def _iso(day: str, month: str, year: str) -> str:
    return f"{year}-{month.zfill(2)}-{day.zfill(2)}"


def convert_to_24h(value: str) -> Optional[str]:
    match = TIME_12H.search(value)
    if not match:
        return None
    hours = int(match.group(1))
    period = (match.group(3) or '').upper()
    if period == 'PM' and hours != 12:
        hours += 12
    elif period == 'AM' and hours == 12:
        hours = 0
    return f"{hours:02d}:{match.group(2)}"


def _named_month_dates(text: str, pattern=NAMED_MONTH_DATE) -> List[str]:
    dates = []
    for day, month, year in pattern.findall(text):
        number = MONTHS.get(month.lower())
        if number:
            dates.append(_iso(day, number, year))
    return dates


def _numeric_dates(text: str) -> List[str]:
    return [_iso(day, month, year) for day, month, year in NUMERIC_DATE.findall(text)]


def find_dates(text: str) -> List[str]:
    """Dates in text as YYYY-MM-DD: month-name forms first, then D/M/YYYY."""
    return _named_month_dates(text) or _numeric_dates(text)


def parse_ocr_text(text: str) -> Optional[ParsedEvent]:
    """Simple ``Title:`` / date / time extraction."""
    title_match = re.search(r'(?:Title|Event):\s*(.+)', text, re.IGNORECASE)
    date_match = NUMERIC_DATE.search(text)
    if not title_match and not date_match:
        return None

    start_date = _iso(*date_match.groups()) if date_match else None
    times = [convert_to_24h(m.group(0)) for m in TIME_12H.finditer(text)]
    start_time = times[0] if times else None
    end_time = times[1] if len(times) > 1 else None

    return ParsedEvent(
        title=title_match.group(1).strip() if title_match else 'Imported Event',
        start_date=start_date,
        end_date=start_date,
        start_time=start_time,
        end_time=end_time,
        is_all_day=start_time is None,
    )


def parse_german_calendar_text(text: str) -> Optional[ParsedEvent]:
    """iOS German detail view, e.g. ``München\\nGanztägig von Mi. 17. Dez. 2025 bis Fr. 19. Dez. 2025``."""
    dates = _named_month_dates(text, GERMAN_DATE)
    if not dates:
        return None
    title_match = re.match(r'^(.+?)(?=\s*Ganztägig|\s*von)', text.strip(), re.IGNORECASE)
    title = title_match.group(1).strip() if title_match else ''
    return ParsedEvent(
        title=title or 'Imported Event',
        start_date=dates[0],
        end_date=dates[1] if len(dates) > 1 else dates[0],
        is_all_day='Ganztägig' in text or 'All-day' in text,
    )


def _find_location(lines: List[str]):
    location = None
    indices = []
    for i, line in enumerate(lines):
        for keyword in LOCATION_KEYWORDS:
            if keyword in line:
                if location is None:
                    location = line.replace(keyword, '').strip()
                indices.append(i)
                break
        else:
            if location is None and DOMAIN_PIPE.search(line):
                parts = line.split('|')
                location = '|'.join(parts[1:]).strip()
                indices.append(i)
            elif location is None and VENUE.search(line) and not TEAM_PREFIX.match(line):
                location = line
                indices.append(i)
    return location, indices


def _find_title(lines: List[str], location_indices: List[int]) -> str:
    title_lines = []
    for i, line in enumerate(lines):
        if i in location_indices:
            if title_lines:
                break
            continue
        if any(p.match(line) for p in DETAIL_PATTERNS) or find_dates(line):
            break
        if any(p.match(line) for p in SKIP_PATTERNS) or DOMAIN_PIPE.search(line):
            if title_lines:
                break
            continue
        if 2 <= len(line) <= 200 and TITLE_CHARS.search(line):
            title_lines.append(re.sub(r'^[<>◀▶←→\s]+', '', line).strip())
        elif title_lines:
            break
    return ' '.join(title_lines).strip()


def _find_times(text: str, lines: List[str]):
    match = MULTI_DAY_TIMES.search(text)
    if match:
        return f"{match.group(1).zfill(2)}:{match.group(2)}", f"{match.group(3).zfill(2)}:{match.group(4)}"
    for i, line in enumerate(lines):
        # first line is usually the status bar clock
        if i == 0 and re.match(r'^\d{2}:\d{2}', line):
            continue
        match = TIME_RANGE.search(line)
        if match:
            return f"{match.group(1).zfill(2)}:{match.group(2)}", f"{match.group(3).zfill(2)}:{match.group(4)}"
    return None, None


def _find_description(lines: List[str]) -> Optional[str]:
    description = None
    for i, line in enumerate(lines):
        if any(keyword in line for keyword in NOTES_KEYWORDS):
            description = ' '.join(lines[i + 1:]).strip() or None
    return description


def parse_calendar_ocr(ocr_text: str) -> Optional[ParsedEvent]:
    """
    Full heuristic over the OCR output of a calendar event screenshot.

    Returns None unless a date can be recognised.
    """
    text = ocr_text.replace('\r\n', '\n').replace('\r', '\n')
    lines = _lines(text)

    location, location_indices = _find_location(lines)
    title = _find_title(lines, location_indices)
    is_all_day = any(marker in text for marker in ALL_DAY_MARKERS)
    start_time, end_time = (None, None) if is_all_day else _find_times(text, lines)

    dates = find_dates(text)
    if not dates:
        logger.info({'msg': 'ocr_no_date_found', 'lines': len(lines)})
        return None

    calendar_match = CALENDAR_NAME.search(text)
    url_match = URL.search(text)

    return ParsedEvent(
        title=title or 'Imported Event',
        start_date=dates[0],
        end_date=dates[1] if len(dates) > 1 else dates[0],
        start_time=start_time,
        end_time=end_time,
        is_all_day=is_all_day,
        location=location or None,
        description=_find_description(lines),
        url=url_match.group(1) if url_match else None,
        calendar=calendar_match.group(1) if calendar_match else None,
        is_tentative=any(marker in text for marker in TENTATIVE_MARKERS),
    )
