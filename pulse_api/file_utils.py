"""
File utility functions for the Innovation Pulse article API.
Common file and time helpers shared by the store and the service.
"""
import json
import os
import time
from datetime import datetime, timezone
from typing import Any


def load_json_file(filepath: str, default: Any) -> Any:
    """
    Load a JSON file with a default fallback.

    Args:
        filepath: Path to the JSON file
        default: Default value if file doesn't exist

    Returns:
        Loaded JSON data or default value

    Raises:
        OSError: If the file exists but cannot be read
        json.JSONDecodeError: If the file contents are not valid JSON
    """
    if os.path.exists(filepath):
        with open(filepath, 'r', encoding='utf-8') as f:
            return json.load(f)
    return default


def dump_json(data: Any) -> str:
    """Serialize data the way it is written to disk (pretty-printed, 2 spaces)."""
    return json.dumps(data, indent=2, ensure_ascii=False)


def save_json_file(filepath: str, data: Any, ensure_dir: bool = True) -> None:
    """
    Save data to a JSON file.

    Args:
        filepath: Path to save the JSON file
        data: Data to save
        ensure_dir: Whether to create parent directory if it doesn't exist
    """
    directory = os.path.dirname(filepath)
    if ensure_dir and directory:
        os.makedirs(directory, exist_ok=True)
    with open(filepath, 'w', encoding='utf-8') as f:
        f.write(dump_json(data))


def get_utc_timestamp() -> str:
    """
    Get current UTC timestamp in ISO format.

    Returns:
        ISO formatted timestamp with millisecond precision and a Z suffix,
        e.g. "2024-01-01T12:00:00.000Z"
    """
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def get_epoch_millis() -> int:
    """Get the current time in milliseconds since the epoch."""
    return int(time.time() * 1000)
