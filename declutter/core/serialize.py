"""
Serialize - konwersje kolumn tekstowych (ISO-8601, JSON) dla SQLite
Centralizuje logikę konwersji dat i kolumn złożonych w całej aplikacji.
"""
import json
from datetime import date, datetime, timezone
from typing import Any, List, Optional, Union

from .errors import DecodeError, ValidationError


def now_local() -> datetime:
    """Aktualny czas lokalny ze strefą"""
    return datetime.now().astimezone()


def parse_datetime(value: Union[str, datetime], field_name: str = "timestamp") -> datetime:
    """
    Parsuj timestamp ISO-8601.

    Args:
        value: String ISO lub obiekt datetime
        field_name: Nazwa pola (dla error message)

    Raises:
        ValidationError: jeśli tekst nie jest poprawnym ISO-8601
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)

    try:
        # Handle ISO format with 'Z' (UTC)
        return datetime.fromisoformat(value.replace('Z', '+00:00'))
    except (ValueError, AttributeError) as e:
        raise ValidationError(f"{field_name} is not a valid ISO-8601 timestamp: {value!r}", value) from e


def parse_optional_datetime(value: Union[str, datetime, None], field_name: str = "timestamp") -> Optional[datetime]:
    """Jak parse_datetime, ale None i pusty string dają None"""
    if value is None or value == "":
        return None
    return parse_datetime(value, field_name)


def to_utc(value: datetime) -> datetime:
    """Sprowadź timestamp do UTC (naiwny traktowany jako czas lokalny)"""
    return value.astimezone(timezone.utc)


def format_datetime(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    return value.isoformat()


def encode_json(value: Any) -> str:
    """Zserializuj strukturę do tekstu JSON (kolumny categories/frequency/reminder_times)"""
    return json.dumps(value, ensure_ascii=False)


def decode_json(raw: str, column: str) -> Any:
    """
    Zdeserializuj tekst JSON z kolumny złożonej.

    Raises:
        DecodeError: jeśli tekst nie jest poprawnym JSON
    """
    try:
        return json.loads(raw)
    except (TypeError, json.JSONDecodeError) as e:
        raise DecodeError(f"Column '{column}' contains malformed JSON: {e}", column=column, raw=raw) from e


def encode_datetime_list(values: Optional[List[datetime]]) -> Optional[str]:
    if values is None:
        return None
    return encode_json([v.isoformat() for v in values])


def decode_datetime_list(raw: Optional[str], column: str) -> Optional[List[datetime]]:
    if raw is None:
        return None

    data = decode_json(raw, column)
    if not isinstance(data, list):
        raise DecodeError(f"Column '{column}' must hold a JSON list", column=column, raw=raw)

    try:
        return [parse_datetime(item, column) for item in data]
    except ValidationError as e:
        raise DecodeError(str(e), column=column, raw=raw) from e
