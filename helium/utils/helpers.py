# helium/utils/helpers.py

import re
from typing import Optional


def calculate_skip(page: int, limit: int) -> int:
    """
    Calculates the number of documents to skip for pagination.

    Args:
        page: The current page number (1-based).
        limit: The number of items per page.

    Returns:
        The number of documents to skip.

    Raises:
        ValueError: If page or limit are not positive integers.
    """
    if not isinstance(page, int) or page < 1:
        raise ValueError("Page number must be a positive integer.")
    if not isinstance(limit, int) or limit < 1:
        raise ValueError("Page limit must be a positive integer.")
    return (page - 1) * limit


def literal_pattern(text: Optional[str], exact: bool = False) -> Optional[str]:
    """
    Turns user text into a regex matching it literally, optionally anchored.
    Returns None if the input is None or blank.
    """
    if text is None or not text.strip():
        return None
    pattern = re.escape(text.strip())
    return f"^{pattern}$" if exact else pattern
