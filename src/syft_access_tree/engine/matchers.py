import fnmatch
from typing import Protocol

from wcmatch.glob import GLOBSTAR, globmatch

WILDCARD_CHARS = ("*", "?", "[")


class Matcher(Protocol):
    def match(self, value: str) -> bool: ...


class ExactMatcher:
    def __init__(self, pattern: str):
        self.pattern = pattern

    def match(self, value: str) -> bool:
        return value == self.pattern


class PathGlobMatcher:
    """Folder path globs; `*` stays within a segment, `**` spans segments."""

    def __init__(self, pattern: str):
        self.pattern = pattern

    def match(self, value: str) -> bool:
        return globmatch(value, self.pattern, flags=GLOBSTAR)


class WildcardMatcher:
    def __init__(self, pattern: str):
        self.pattern = pattern

    def match(self, value: str) -> bool:
        return fnmatch.fnmatchcase(value, self.pattern)


def create_matcher(pattern: str, is_path: bool = False) -> Matcher:
    if pattern == "*" and not is_path:
        return WildcardMatcher(pattern)
    if any(c in pattern for c in WILDCARD_CHARS):
        return PathGlobMatcher(pattern) if is_path else WildcardMatcher(pattern)
    return ExactMatcher(pattern)
