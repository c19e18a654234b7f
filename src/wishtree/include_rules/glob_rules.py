"""Implementation of inclusion rules using git wildmatch glob syntax."""

import os
from typing import Iterable, Optional, Tuple

from pathspec import PathSpec

from wishtree.exceptions import InvalidPatternError

from .base_rules import BaseInclusionRules


def _find_unclosed_class(pattern: str) -> Optional[int]:
    """Return the index of a "[" that is never closed, or None if all classes are balanced."""
    i = 0
    while i < len(pattern):
        char = pattern[i]
        if char == "\\":
            i += 2
            continue
        if char == "[":
            j = i + 1
            if j < len(pattern) and pattern[j] in "!^":
                j += 1
            # A "]" right after the opening bracket is a literal member of the class
            if j < len(pattern) and pattern[j] == "]":
                j += 1
            while j < len(pattern) and pattern[j] != "]":
                j += 2 if pattern[j] == "\\" else 1
            if j >= len(pattern):
                return i
            i = j
        i += 1
    return None


def _as_literal_prefix(pattern: str) -> str:
    """Escape a leading "!" or "#" so pathspec reads it as part of the name."""
    if pattern.startswith(("!", "#")):
        return "\\" + pattern
    return pattern


def _compile(patterns: Iterable[str]) -> PathSpec:
    return PathSpec.from_lines("gitwildmatch", [_as_literal_prefix(pattern) for pattern in patterns])


def validate_pattern(pattern: str) -> None:
    """Reject patterns that would silently never match or that pathspec cannot compile.

    Args:
        pattern: A single include pattern.

    Raises:
        InvalidPatternError: If the pattern is not a string, is blank, has an unclosed
            character class, or fails to compile.

    Example:
        >>> validate_pattern("**/*.md")
        >>> validate_pattern("[abc")
        Traceback (most recent call last):
            ...
        wishtree.exceptions.InvalidPatternError: Invalid include pattern '[abc': unclosed character class at offset 0
    """
    if not isinstance(pattern, str):
        raise InvalidPatternError(repr(pattern), "patterns must be strings")
    if not pattern.strip():
        raise InvalidPatternError(pattern, "pattern is empty")

    offset = _find_unclosed_class(pattern)
    if offset is not None:
        raise InvalidPatternError(pattern, f"unclosed character class at offset {offset}")

    try:
        _compile([pattern])
    except ValueError as e:
        raise InvalidPatternError(pattern, str(e)) from e


class GlobInclusionRules(BaseInclusionRules):
    """Inclusion rules using git wildmatch glob syntax.

    Patterns are matched with the pathspec library using the glob rules Git uses for
    .gitignore files, applied here to decide what to include rather than exclude:

    - ``*`` matches any run of characters within one path segment
    - ``**`` matches across segments (``**/*.md`` matches ``a.md`` and ``doc/sub/c.md``)
    - ``?`` matches a single character and ``[abc]`` a character class
    - A pattern without a slash matches the file name at any depth
    - A pattern containing a slash is anchored at the source root
    - A trailing slash (``doc/``) matches everything below that directory

    Patterns combine with OR semantics: a path is included when it matches any
    pattern. There is no negation and no comment syntax, so a leading ``!`` or ``#``
    is an ordinary character of the name. An empty pattern list includes nothing.
    Matching is case sensitive and dotfiles get no special treatment.

    Instances are immutable.

    Example:
        >>> rules = GlobInclusionRules(["*.md", "src/**/*.py"])
        >>> rules.include("docs/guide.md")
        True
        >>> rules.include("src/pkg/mod.py")
        True
        >>> rules.include("tests/test_mod.py")
        False
        >>> GlobInclusionRules([]).include("anything.txt")
        False

    Note:
        The paths provided to include() should be relative to the source root. Native
        Windows separators are converted to forward slashes before matching.
    """

    __slots__ = ("_patterns", "_spec")

    def __init__(self, patterns: Iterable[str] = ()):
        """Compile the given patterns.

        Args:
            patterns: Include patterns, in order.

        Raises:
            InvalidPatternError: If any pattern is malformed.
        """
        checked = tuple(patterns)
        for pattern in checked:
            validate_pattern(pattern)
        self._patterns: Tuple[str, ...] = checked
        self._spec = _compile(checked)

    @property
    def patterns(self) -> Tuple[str, ...]:
        return self._patterns

    def include(self, path: str) -> bool:
        """Check whether a relative path matches any of the include patterns.

        Args:
            path: Path relative to the source root.

        Returns:
            bool: True if the path matches at least one pattern, False otherwise
                (always False with no patterns).

        Example:
            >>> rules = GlobInclusionRules(["**/*.md", "!a.md"])
            >>> rules.include("a.md")
            True
            >>> rules.include("!a.md")
            True
            >>> rules.include("a.txt")
            False
        """
        if not self._patterns:
            return False
        if os.sep != "/":
            path = path.replace(os.sep, "/")
        return bool(self._spec.match_file(path))

    def __repr__(self) -> str:
        return f"GlobInclusionRules({list(self._patterns)!r})"
