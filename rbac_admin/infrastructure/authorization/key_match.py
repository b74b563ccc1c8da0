"""Segment-wise path pattern matching used by the policy matcher.

Patterns and paths are split on ``/`` and compared segment by segment:

- ``*`` matches exactly one non-empty segment
- ``:name`` matches exactly one non-empty segment
- ``*`` as the final pattern segment matches the rest of the path,
  including nothing (``/api/v1/users/*`` matches ``/api/v1/users/``)
- any other segment must be equal

Paths are compared raw: no trailing-slash normalisation, no decoding.

Examples:
    >>> key_match("/api/v1/users/7/password", "/api/v1/users/:id/password")
    True
    >>> key_match("/api/v1/users/", "/api/v1/users/*")
    True
    >>> key_match("/api/v1/users", "/api/v1/users/*")
    False
"""

WILDCARD = "*"


def _is_single_segment_wildcard(segment: str) -> bool:
    return segment == WILDCARD or (segment.startswith(":") and len(segment) > 1)


def key_match(path: str, pattern: str) -> bool:
    """Return True if request ``path`` matches policy ``pattern``."""
    path_segments = path.split("/")
    pattern_segments = pattern.split("/")
    last = len(pattern_segments) - 1

    for index, expected in enumerate(pattern_segments):
        if index >= len(path_segments):
            return False
        if index == last and expected == WILDCARD:
            return True
        actual = path_segments[index]
        if _is_single_segment_wildcard(expected):
            if not actual:
                return False
            continue
        if actual != expected:
            return False

    return len(path_segments) == len(pattern_segments)


def key_match_func(*args: str) -> bool:
    """Adapter with the signature casbin passes to matcher functions."""
    path, pattern = args[0], args[1]
    return key_match(str(path), str(pattern))
