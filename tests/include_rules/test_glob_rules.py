import warnings

import pytest

from wishtree.exceptions import InvalidPatternError
from wishtree.include_rules.base_rules import BaseInclusionRules
from wishtree.include_rules.glob_rules import GlobInclusionRules, validate_pattern


@pytest.mark.parametrize(
    "patterns,path,expected",
    [
        # Double star crosses directory levels, including none
        (["**/*.md"], "doc/a.md", True),
        (["**/*.md"], "doc/sub/c.md", True),
        (["**/*.md"], "a.md", True),
        (["**/*.md"], "doc/b.txt", False),
        # A pattern without a slash matches the file name at any depth
        (["*.md"], "a.md", True),
        (["*.md"], "doc/sub/c.md", True),
        # A pattern with a slash is anchored and single star stays in one segment
        (["doc/*.md"], "doc/a.md", True),
        (["doc/*.md"], "doc/sub/c.md", False),
        (["doc/*.md"], "other/doc/a.md", False),
        # Single character and character classes
        (["?.md"], "a.md", True),
        (["?.md"], "ab.md", False),
        (["[ab].txt"], "a.txt", True),
        (["[ab].txt"], "c.txt", False),
        # Trailing slash selects everything below a directory
        (["doc/"], "doc/a.md", True),
        (["doc/"], "doc/sub/c.md", True),
        (["doc/"], "docs/a.md", False),
        # Case sensitive
        (["*.MD"], "a.md", False),
        # Dotfiles are ordinary names
        (["*"], ".hidden", True),
        (["**/*.cfg"], ".config/app.cfg", True),
        # Patterns combine with OR
        (["*.md", "*.txt"], "doc/b.txt", True),
        (["*.md", "*.txt"], "doc/c.png", False),
        # A leading "!" is part of the name, never a negation
        (["**/*.md", "!a.md"], "a.md", True),
        (["**/*.md", "!a.md"], "!a.md", True),
        (["**/*.md", "!drafts/**"], "drafts/b.md", True),
        (["!a.md"], "a.md", False),
        (["!"], "!", True),
        # A leading "#" is part of the name, never a comment
        (["#notes.md"], "#notes.md", True),
        (["#notes.md"], "notes.md", False),
    ],
)
def test_include(patterns, path, expected):
    rules = GlobInclusionRules(patterns)
    assert rules.include(path) is expected


def test_empty_pattern_list_includes_nothing():
    rules = GlobInclusionRules([])
    assert rules.include("a.md") is False
    assert rules.include("doc/sub/c.md") is False


def test_double_star_markdown_selection():
    rules = GlobInclusionRules(["**/*.md"])
    paths = ["doc/a.md", "doc/b.txt", "doc/sub/c.md"]
    assert [path for path in paths if rules.include(path)] == ["doc/a.md", "doc/sub/c.md"]


@pytest.mark.parametrize(
    "pattern",
    [
        "",
        "   ",
        "[abc",
        "doc/[a-",
        "*.[!md",
    ],
)
def test_invalid_patterns(pattern):
    with pytest.raises(InvalidPatternError) as exc_info:
        GlobInclusionRules([pattern])
    assert exc_info.value.pattern == pattern
    assert exc_info.value.reason


@pytest.mark.parametrize("pattern", ["[]abc]", "\\[abc", "\\#notes.md", "#notes.md", "!", "![ab].md", "[!a].md", "**"])
def test_valid_edge_patterns(pattern):
    validate_pattern(pattern)


def test_non_string_pattern():
    with pytest.raises(InvalidPatternError):
        validate_pattern(5)  # type: ignore[arg-type]


def test_invalid_pattern_is_value_error():
    with pytest.raises(ValueError):
        GlobInclusionRules(["[abc"])


def test_unclosed_class_reason_names_offset():
    with pytest.raises(InvalidPatternError) as exc_info:
        validate_pattern("doc/[a-")
    assert "offset 4" in exc_info.value.reason


def test_rules_cannot_be_changed():
    rules = GlobInclusionRules(["*.md"])
    assert not hasattr(rules, "add_rule")
    with pytest.raises(AttributeError):
        rules.patterns = ("*.txt",)  # type: ignore[misc]
    with pytest.raises(AttributeError):
        rules.extra = "*.txt"  # type: ignore[attr-defined]
    assert rules.patterns == ("*.md",)
    assert not rules.include("notes.txt")


def test_patterns_are_copied_from_input():
    patterns = ["*.md"]
    rules = GlobInclusionRules(patterns)
    patterns.append("*.txt")
    assert rules.patterns == ("*.md",)
    assert not rules.include("notes.txt")


def test_patterns_are_kept_in_order():
    rules = GlobInclusionRules(["b/**", "a/**", "!a/x"])
    assert rules.patterns == ("b/**", "a/**", "!a/x")
    assert repr(rules) == "GlobInclusionRules(['b/**', 'a/**', '!a/x'])"


def test_custom_base_rules():
    class SuffixRules(BaseInclusionRules):
        def include(self, path: str) -> bool:
            return path.endswith(".py")

    rules = SuffixRules()
    assert rules.include("pkg/mod.py")
    assert not rules.include("pkg/mod.txt")
    assert not hasattr(rules, "add_rule")


def test_compiling_patterns_emits_no_warnings():
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        rules = GlobInclusionRules(["**/*.md", "!a.md"])
        assert rules.include("doc/a.md")
