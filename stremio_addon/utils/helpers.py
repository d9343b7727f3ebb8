"""
Helper Utilities
General purpose utility functions
"""
from datetime import datetime, timezone
from typing import Dict
from urllib.parse import parse_qsl


def format_duration(duration_ms: int) -> str:
    """
    Format a duration for the access log

    Args:
        duration_ms: Elapsed time in whole milliseconds

    Returns:
        Duration with unit suffix, e.g. "12ms"
    """
    return f"{int(duration_ms)}ms"


def format_released(value: datetime) -> str:
    """
    Format a datetime the way Stremio expects release timestamps

    Naive datetimes are treated as UTC.

    Args:
        value: Release date

    Returns:
        ISO 8601 string with millisecond precision, e.g. "2010-12-06T05:00:00.000Z"
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def parse_released(value: str) -> datetime:
    """
    Parse an ISO 8601 release timestamp

    Raises:
        ValueError: If the string is not ISO 8601
    """
    # fromisoformat only learned the "Z" suffix in 3.11
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)


def parse_extra(segment: str) -> Dict[str, str]:
    """
    Parse the extra path segment of a catalog request

    Args:
        segment: Segment like "genre=Action&skip=100"

    Returns:
        Mapping of extra names to values (last value wins)
    """
    if not segment:
        return {}

    return dict(parse_qsl(segment, keep_blank_values=True))


def raw_extra_segment(raw_path: bytes) -> str:
    """
    Take the still percent-encoded extra segment from a request's raw path

    Path parameters arrive decoded, which would turn an encoded "&" or "="
    inside a value into a separator before parse_extra sees it.

    Args:
        raw_path: ASGI raw_path, e.g. b"/catalog/movie/top/search=Tom%26Jerry.json"

    Returns:
        Last path segment without ".json", e.g. "search=Tom%26Jerry"
    """
    path = raw_path.decode("latin-1").split("?", 1)[0]
    segment = path.rsplit("/", 1)[-1]
    if segment.endswith(".json"):
        segment = segment[: -len(".json")]
    return segment


def cache_control(max_age: int, public: bool = False) -> str:
    """
    Build a Cache-Control header value

    Args:
        max_age: Max age in seconds
        public: Allow shared caches

    Returns:
        Header value, empty if max_age is not positive
    """
    if max_age <= 0:
        return ""

    value = f"max-age={max_age}"
    return f"public, {value}" if public else value


def request_url(path: str, query: str = "") -> str:
    """Path plus query string, as logged for a request"""
    return f"{path}?{query}" if query else path
