# Query parameter validation for the movies endpoints
# helium/utils/validation.py

import re
from datetime import datetime, timezone
from typing import Any, Callable, Mapping, NamedTuple, Optional, Tuple

MAX_PAGE_SIZE = 1000
DEFAULT_PAGE_SIZE = 100
MAX_PAGE_NUMBER = 10000
MIN_YEAR = 1874
YEARS_AHEAD = 5

MAX_ID_LENGTH = 255

MOVIE_ID_PATTERN = re.compile(r"[^\s/\\?#](?:[^/\\?#]*[^\s/\\?#])?")
ACTOR_ID_PATTERN = re.compile(r"nm[0-9]{5,9}")
DIGITS_PATTERN = re.compile(r"[0-9]+")
YEAR_PATTERN = re.compile(r"[0-9]{4}")
DECIMAL_PATTERN = re.compile(r"[0-9]+(?:\.[0-9]+)?")


class ValidationResult(NamedTuple):
    validated: bool
    message: str = ""


VALID = ValidationResult(True, "")


def _fail(param: str, reason: str) -> ValidationResult:
    return ValidationResult(False, f"Invalid {param} parameter: {reason}")


def max_year() -> int:
    """Latest release year accepted (a few years out for announced titles)."""
    return datetime.now(timezone.utc).year + YEARS_AHEAD


def _check_text(value: Any, min_length: int, max_length: int) -> Optional[str]:
    if not isinstance(value, str) or not value.strip():
        return "must be a non-empty string"
    if not min_length <= len(value.strip()) <= max_length:
        return f"must be between {min_length} and {max_length} characters"
    return None


def _check_q(value: Any) -> Optional[str]:
    return _check_text(value, 2, 20)


def _check_genre(value: Any) -> Optional[str]:
    return _check_text(value, 3, 20)


def _check_year(value: Any) -> Optional[str]:
    if not isinstance(value, str) or not YEAR_PATTERN.fullmatch(value):
        return "must be a 4 digit year"
    if not MIN_YEAR <= int(value) <= max_year():
        return f"must be between {MIN_YEAR} and {max_year()}"
    return None


def _check_rating(value: Any) -> Optional[str]:
    if not isinstance(value, str) or not DECIMAL_PATTERN.fullmatch(value):
        return "must be a number"
    if not 0 <= float(value) <= 10:
        return "must be between 0 and 10"
    return None


def _check_actor_id(value: Any) -> Optional[str]:
    if not isinstance(value, str) or not ACTOR_ID_PATTERN.fullmatch(value):
        return "must be an actor ID like nm0000704"
    return None


def _check_positive_int(value: Any, maximum: int) -> Optional[str]:
    if not isinstance(value, str) or not DIGITS_PATTERN.fullmatch(value) or not value.lstrip("0"):
        return "must be a positive integer"
    # length check first: int() refuses very long digit strings
    if len(value) > len(str(maximum)) or int(value) > maximum:
        return f"must be {maximum} or less"
    return None


def _check_page_number(value: Any) -> Optional[str]:
    return _check_positive_int(value, MAX_PAGE_NUMBER)


def _check_page_size(value: Any) -> Optional[str]:
    return _check_positive_int(value, MAX_PAGE_SIZE)


# Checked in this order; the first failure is reported.
MOVIE_PARAM_CHECKS: Tuple[Tuple[str, Callable[[Any], Optional[str]]], ...] = (
    ("q", _check_q),
    ("genre", _check_genre),
    ("year", _check_year),
    ("rating", _check_rating),
    ("actorid", _check_actor_id),
    ("pageNumber", _check_page_number),
    ("pageSize", _check_page_size),
)


def validate_movies(params: Mapping[str, Any]) -> ValidationResult:
    """
    Validates the raw query parameters of the movie list endpoint.

    Only the parameters that are present are checked; unknown parameters are
    ignored. Values are expected as the raw strings received on the query string.

    Args:
        params: Mapping of query parameter name to raw value.

    Returns:
        ValidationResult(True, "") when every present parameter is valid, otherwise
        ValidationResult(False, message) naming the first failing parameter.
    """
    for param, check in MOVIE_PARAM_CHECKS:
        if param not in params:
            continue
        reason = check(params[param])
        if reason:
            return _fail(param, reason)
    return VALID


def validate_movie_id(movie_id: Any) -> ValidationResult:
    """
    Validates a movie ID path parameter against the shape document keys may take:
    1 to 255 characters, no surrounding whitespace and none of ``/ \\ ? #``.

    Args:
        movie_id: The raw ID, possibly None.

    Returns:
        A ValidationResult; the message is empty when the ID is valid.
    """
    if movie_id is None or not isinstance(movie_id, str) or not movie_id.strip():
        return ValidationResult(False, "Invalid Movie ID parameter: must be a non-empty string")
    if len(movie_id) > MAX_ID_LENGTH:
        return ValidationResult(False, f"Invalid Movie ID parameter: must be {MAX_ID_LENGTH} characters or less")
    if not MOVIE_ID_PATTERN.fullmatch(movie_id):
        return ValidationResult(False, "Invalid Movie ID parameter: contains invalid characters")
    return VALID
