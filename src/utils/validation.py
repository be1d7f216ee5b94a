"""
Validation Utilities
====================
Security-focused validation for input paths and lenient decoding of
review payloads read from disk or stdin.

Author: Gia Tenica*
*Gia Tenica is an anagram for Agentic AI. Gia is a fully autonomous AI researcher,
for more information see: https://giatenica.com
"""

import json
from pathlib import Path
from typing import BinaryIO, Optional, Any, Union
from loguru import logger

from src.config import REVIEW_CLI


def is_safe_path(path: Union[str, Path], base_dir: Optional[Union[str, Path]] = None) -> bool:
    """
    Check if a path is safe (no path traversal, no symlinks to outside).

    Args:
        path: Path to validate
        base_dir: Optional base directory that path must be under

    Returns:
        True if path is safe, False otherwise
    """
    try:
        # Resolve the path to handle .. and symlinks
        resolved = Path(path).resolve()

        # Check for path traversal patterns in original path
        path_str = str(path)
        if ".." in path_str or path_str.startswith("/etc"):
            logger.warning(f"Potential path traversal detected: {path}")
            return False

        # If base_dir is provided, ensure path is under it
        if base_dir:
            base_resolved = Path(base_dir).resolve()
            try:
                resolved.relative_to(base_resolved)
            except ValueError:
                logger.warning(f"Path {resolved} is not under base directory {base_resolved}")
                return False

        return True

    except (OSError, ValueError) as e:
        logger.warning(f"Path validation error for {path}: {e}")
        return False


def validate_path(
    path: Union[str, Path],
    must_exist: bool = False,
    must_be_file: bool = False,
    base_dir: Optional[Union[str, Path]] = None,
) -> Path:
    """
    Validate a file path with security checks.

    Args:
        path: Path to validate
        must_exist: If True, path must exist
        must_be_file: If True, path must be a file
        base_dir: Optional base directory that path must be under

    Returns:
        Validated Path object

    Raises:
        ValueError: If path fails validation
        FileNotFoundError: If path must exist but doesn't
    """
    if not path:
        raise ValueError("Path cannot be empty")

    path_obj = Path(path)

    if not is_safe_path(path_obj, base_dir):
        raise ValueError(f"Path validation failed: {path}")

    if must_exist and not path_obj.exists():
        raise FileNotFoundError(f"Path does not exist: {path}")

    if must_be_file and path_obj.exists() and not path_obj.is_file():
        raise ValueError(f"Path is not a file: {path}")

    return path_obj


def decode_review_bytes(data: bytes) -> str:
    """Decode raw bytes as UTF-8, replacing undecodable sequences."""
    if data.startswith(b"\xef\xbb\xbf"):
        data = data[3:]
    return data.decode("utf-8", errors="replace")


def _resolve_max_bytes(max_bytes: Optional[int]) -> int:
    return REVIEW_CLI.MAX_INPUT_BYTES if max_bytes is None else max_bytes


def read_review_stream(
    stream: BinaryIO,
    max_bytes: Optional[int] = None,
    name: str = "<stdin>",
) -> str:
    """
    Read a review report from a binary stream such as stdin.

    Args:
        stream: Binary stream to read
        max_bytes: Size limit (defaults to REVIEW_CLI.MAX_INPUT_BYTES)
        name: Label used in error messages

    Returns:
        Stream contents as text

    Raises:
        ValueError: If the stream holds more than the limit
    """
    limit = _resolve_max_bytes(max_bytes)
    if limit <= 0:
        return decode_review_bytes(stream.read())

    data = stream.read(limit + 1)
    if len(data) > limit:
        raise ValueError(f"Review input too large: {name} (more than {limit} bytes)")
    return decode_review_bytes(data)


def read_review_file(
    path: Union[str, Path],
    max_bytes: Optional[int] = None,
) -> str:
    """
    Read a review report from disk.

    Args:
        path: File to read
        max_bytes: Size limit (defaults to REVIEW_CLI.MAX_INPUT_BYTES)

    Returns:
        File contents as text; binary garbage degrades to replacement characters

    Raises:
        ValueError: If the path is unsafe, not a file, or larger than the limit
        FileNotFoundError: If the file does not exist
    """
    limit = _resolve_max_bytes(max_bytes)
    path_obj = validate_path(path, must_exist=True, must_be_file=True)

    size = path_obj.stat().st_size
    if limit > 0 and size > limit:
        raise ValueError(f"Review file too large: {path} ({size} bytes > {limit} bytes)")

    return decode_review_bytes(path_obj.read_bytes())


def safe_json_loads(
    data: Union[str, bytes],
    default: Any = None,
    log_errors: bool = True,
) -> Any:
    """
    Safely parse JSON with error handling.

    Args:
        data: JSON string or bytes to parse
        default: Default value if parsing fails
        log_errors: Whether to log parsing errors

    Returns:
        Parsed JSON or default value
    """
    if not data:
        return default

    try:
        if isinstance(data, bytes):
            data = data.decode('utf-8')
        return json.loads(data)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        if log_errors:
            logger.warning(f"JSON parsing error: {e}")
        return default
