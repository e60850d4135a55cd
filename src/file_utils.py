"""
File and timestamp utility functions shared by the article store.
"""
import os
import uuid
from datetime import datetime, timezone

EPOCH_MIN = datetime.min.replace(tzinfo=timezone.utc)


def atomic_write_bytes(filepath: str, data: bytes) -> None:
    """
    Write bytes to a file without exposing a partially written file.

    The data is written to a hidden temporary file in the same directory,
    flushed to disk, then moved over the target with os.replace().

    Args:
        filepath: Destination path
        data: File contents
    """
    directory = os.path.dirname(filepath) or "."
    tmp_path = os.path.join(directory, f".{os.path.basename(filepath)}.tmp-{uuid.uuid4().hex}")
    try:
        with open(tmp_path, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, filepath)
    finally:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)


def atomic_write_text(filepath: str, text: str, encoding: str = "utf-8") -> None:
    """Encode text and write it with atomic_write_bytes()."""
    atomic_write_bytes(filepath, text.encode(encoding))


def get_utc_timestamp() -> str:
    """
    Get current UTC timestamp in ISO format.

    Returns:
        ISO formatted timestamp with millisecond precision and a Z suffix,
        e.g. 2024-06-01T12:00:00.000Z
    """
    return format_timestamp(datetime.now(timezone.utc))


def format_timestamp(value: datetime) -> str:
    """Format an aware datetime the way get_utc_timestamp() does."""
    value = value.astimezone(timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    """
    Parse an ISO-8601 timestamp into an aware UTC datetime.

    Accepts a trailing Z, date-only values and naive values (read as UTC).
    Missing or unparsable values return EPOCH_MIN, so they sort as the oldest.
    """
    if not value or not isinstance(value, str):
        return EPOCH_MIN
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)
    except (ValueError, OverflowError):
        return EPOCH_MIN
