"""
Glob patterns for watch mode.

Patterns use shell glob syntax where ``*`` and ``?`` never cross a ``/``:
``vendor/*`` matches ``vendor/x.go`` but not ``vendor/a/x.go``. Watched
patterns are matched against an entry's base name; ignored patterns against
its path relative to the watched root or its base name. Ignore wins.
"""

from __future__ import annotations

import fnmatch
from collections.abc import Iterable
from dataclasses import dataclass, field


def match_glob(pattern: str, path: str) -> bool:
    """
    Match a '/'-separated path against a glob pattern segment by segment.

    Args:
        pattern: Glob pattern (``*``, ``?``, ``[abc]``, ``[!abc]`` or ``[^abc]``)
        path: Path using '/' as separator

    Returns:
        True if every segment matches

    Examples:
        >>> match_glob("*.go", "main.go")
        True
        >>> match_glob("vendor/*", "vendor/x.go")
        True
        >>> match_glob("vendor/*", "vendor/lib/x.go")
        False
    """
    pattern_parts = pattern.split("/")
    path_parts = path.split("/")

    # Must have same number of segments
    if len(pattern_parts) != len(path_parts):
        return False

    for pattern_part, path_part in zip(pattern_parts, path_parts):
        if not fnmatch.fnmatchcase(path_part, pattern_part.replace("[^", "[!")):
            return False
    return True


@dataclass
class PatternSet:
    """
    Watched and ignored glob patterns.

    Attributes:
        watched: Patterns matched against the base name
        ignored: Patterns matched against the relative path or the base name
    """

    watched: list[str] = field(default_factory=list)
    ignored: list[str] = field(default_factory=list)

    @classmethod
    def of(cls, watched: Iterable[str], ignored: Iterable[str] = ()) -> PatternSet:
        return cls(list(watched), list(ignored))

    def is_ignored(self, rel_path: str, name: str) -> bool:
        return any(
            match_glob(pattern, rel_path) or match_glob(pattern, name)
            for pattern in self.ignored
        )

    def is_watched(self, name: str) -> bool:
        return any(match_glob(pattern, name) for pattern in self.watched)

    def is_tracked(self, rel_path: str, name: str) -> bool:
        """True if the entry is watched and not ignored."""
        return not self.is_ignored(rel_path, name) and self.is_watched(name)
