import uuid
from datetime import datetime, timezone

from movieShelf.settings import LOG_PATH


def log_debug(message: str) -> None:
    """Append timestamped message to the log file."""
    LOG_PATH.parent.mkdir(parents=True, exist_ok=True)
    ts = datetime.now().isoformat(timespec="seconds")
    with LOG_PATH.open("a", encoding="utf-8") as f:
        f.write(f"[{ts}] {message}\n")


def new_id() -> str:
    """Opaque row id for locally created rows."""
    return uuid.uuid4().hex


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="microseconds")


def parse_timestamp(value) -> datetime | None:
    """
    Accept a datetime or an ISO-8601 string (``Z`` suffix allowed) and
    return a timezone-aware datetime. Naive values are taken as UTC.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        dt = value
    else:
        text = str(value).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        dt = datetime.fromisoformat(text)
    return dt if dt.tzinfo else dt.replace(tzinfo=timezone.utc)


def human_date(dt: datetime | None) -> str:
    """``Oct 19, 2026`` style date in local time, empty string for missing values."""
    if dt is None:
        return ""
    dt = dt.astimezone()
    return f"{dt:%b} {dt.day}, {dt.year}"


def plural(count: int, word: str) -> str:
    """``1 review`` / ``3 reviews``."""
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


def split_csv(value) -> list[str]:
    """
    Normalize a value that may be None, a list, or a comma-separated string
    into a list of clean strings.
    """
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [str(item).strip() for item in value if str(item).strip()]
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    return []
