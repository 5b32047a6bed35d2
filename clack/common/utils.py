"""
Utility functions for Clack.
"""

import ntpath
import posixpath
from datetime import datetime, timezone


def utc_now() -> datetime:
    """
    Get the current time as a timezone-aware UTC datetime.
    
    Returns:
        Current UTC time
    """
    return datetime.now(timezone.utc)


def bare_file_name(path: str) -> str:
    """
    Strip any directory components from a path.
    
    Both '/' and '\\' are treated as separators, so a name produced on
    one platform cannot climb out of the working directory on another.
    
    Args:
        path: File path, possibly with directories
    
    Returns:
        The final path component
    """
    return ntpath.basename(posixpath.basename(path))


def is_truthy(value: str) -> bool:
    """Interpret an environment variable as a boolean flag."""
    return value is not None and value.strip().lower() in ("1", "true", "yes", "on")
