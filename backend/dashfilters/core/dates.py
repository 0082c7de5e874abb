"""
Normalizacion de fechas para mostrar en el dashboard.

Acepta fechas en varios formatos de texto (ISO, DD/MM/YYYY, texto libre) y
devuelve siempre DD-MM-YYYY. Si el valor no se puede interpretar se devuelve
tal cual: un campo con fecha rota nunca debe romper una respuesta.
"""
from __future__ import annotations

from datetime import date, datetime

from dateutil import parser as date_parser

MISSING_DATE = 'N/A'
SLASH_FORMAT = '%d/%m/%Y'

# Missing fields in free-form text are filled from a fixed date so the result
# does not depend on when the call happens.
_FREEFORM_DEFAULT = datetime(2001, 1, 1)


def _to_display(value: date) -> str:
    return f'{value.day:02d}-{value.month:02d}-{value.year:04d}'


def _parse_text(text: str) -> date:
    if '-' in text and len(text) >= 10:
        return date_parser.isoparse(text).date()
    if '/' in text:
        return datetime.strptime(text, SLASH_FORMAT).date()
    return date_parser.parse(text, default=_FREEFORM_DEFAULT).date()


def parse_date(value) -> date | None:
    """Same classification as format_date, returning None where it would fall back."""
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return _parse_text(str(value))
    except Exception:
        return None


def format_date(value) -> str:
    """
    Return ``value`` as DD-MM-YYYY.

    Empty values give ``'N/A'``. Text is classified in this order: ISO when it
    has a hyphen and at least 10 chars, DD/MM/YYYY when it has a slash, and a
    permissive parse otherwise. Anything that fails to parse, or parses to an
    impossible date, is returned unchanged.
    """
    if value is None or value == '':
        return MISSING_DATE
    if isinstance(value, (date, datetime)):
        return _to_display(value)
    text = str(value)
    try:
        return _to_display(_parse_text(text))
    except Exception:
        return text
