"""Wildcard permission matching.

A granted permission name such as "posts.*.own" is split into segments on the
configured delimiters (default "." and "/") and compared with a queried
permission segment by segment, case-sensitively:

- a "*" segment matches exactly one candidate segment;
- a trailing "*" also matches any remaining tail ("posts.*" covers
  "posts.edit.own");
- any other length mismatch fails ("posts.edit" does not cover
  "posts.edit.extra");
- no substring wildcards ("post*" is malformed).

Usage:
    >>> matches("posts.*", "posts.edit")
    True
    >>> matches("posts.edit", "posts.edit.extra")
    False
"""

import re
from functools import lru_cache

from warden.core.enums import ErrorCode
from warden.core.errors import ValidationError
from warden.core.result import Failure, Result, Success

WILDCARD = "*"
DEFAULT_DELIMITERS = "./"


@lru_cache(maxsize=16)
def _splitter(delimiters: str) -> re.Pattern[str]:
    return re.compile(f"[{re.escape(delimiters)}]")


def split_segments(value: str, delimiters: str = DEFAULT_DELIMITERS) -> list[str]:
    """Split a permission string into segments."""
    return _splitter(delimiters).split(value)


def matches(
    pattern: str,
    candidate: str,
    delimiters: str = DEFAULT_DELIMITERS,
) -> bool:
    """Check whether a granted pattern covers a queried permission.

    Args:
        pattern: Granted permission name, possibly containing "*" segments.
        candidate: Queried permission name.
        delimiters: Segment delimiter characters.

    Returns:
        bool: True if every candidate segment is covered by the pattern.
    """
    pattern_segments = split_segments(pattern, delimiters)
    candidate_segments = split_segments(candidate, delimiters)

    if len(pattern_segments) > len(candidate_segments):
        return False
    if (
        len(pattern_segments) < len(candidate_segments)
        and pattern_segments[-1] != WILDCARD
    ):
        return False

    return all(
        expected == WILDCARD or expected == actual
        for expected, actual in zip(pattern_segments, candidate_segments)
    )


def validate_pattern(
    pattern: str,
    delimiters: str = DEFAULT_DELIMITERS,
) -> Result[str, ValidationError]:
    """Validate a wildcard pattern.

    Rejects empty patterns, empty segments ("posts..edit", "posts.") and
    partial-segment wildcards ("post*").

    Args:
        pattern: Pattern to validate.
        delimiters: Segment delimiter characters.

    Returns:
        Success(pattern) if well formed, Failure(ValidationError) otherwise.
    """
    if not pattern:
        return Failure(error=_malformed(pattern, "pattern is empty"))

    for segment in split_segments(pattern, delimiters):
        if not segment:
            return Failure(error=_malformed(pattern, "pattern has an empty segment"))
        if WILDCARD in segment and segment != WILDCARD:
            return Failure(
                error=_malformed(pattern, f"segment `{segment}` mixes `*` with text")
            )

    return Success(value=pattern)


def validate_candidate(
    candidate: str,
    delimiters: str = DEFAULT_DELIMITERS,
) -> Result[str, ValidationError]:
    """Validate a queried permission string (non-empty, no empty segments)."""
    if not candidate or not all(split_segments(candidate, delimiters)):
        return Failure(
            error=_malformed(candidate, "permission string has an empty segment")
        )
    return Success(value=candidate)


def _malformed(pattern: str, reason: str) -> ValidationError:
    return ValidationError(
        code=ErrorCode.INVALID_WILDCARD_PATTERN,
        message=f"Wildcard permission `{pattern}` is not properly formatted: {reason}.",
        field="name",
    )
