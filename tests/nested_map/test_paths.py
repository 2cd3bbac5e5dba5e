"""Tests for dot-path normalization."""

import pytest as _pytest

import nestmap.nested_map._paths as paths


class TestNormalizeKey:
    """normalize_key() behavior."""

    def test_plain_key_unchanged(self) -> None:
        """A clean path is returned as-is."""
        assert paths.normalize_key("a.b.c") == "a.b.c"

    def test_mixed_noise(self) -> None:
        """Whitespace, duplicate and outer dots are all cleaned up."""
        assert paths.normalize_key("  a..b. .c. ") == "a.b.c"

    @_pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("a b", "ab"),
            ("a\t.\nb", "a.b"),
            (".a", "a"),
            ("a.", "a"),
            ("...a...b...", "a.b"),
        ],
    )
    def test_individual_rules(self, raw: str, expected: str) -> None:
        """Each normalization rule applies on its own."""
        assert paths.normalize_key(raw) == expected

    @_pytest.mark.parametrize("raw", ["", ".", "....", " . . ", "\t\n"])
    def test_degenerate_input_gives_empty_string(self, raw: str) -> None:
        """Empty, all-dot and all-whitespace input normalize to ''."""
        assert paths.normalize_key(raw) == ""

    @_pytest.mark.parametrize("raw", ["a..b", " x . y ", "..q..", "plain"])
    def test_idempotent(self, raw: str) -> None:
        """Normalizing twice gives the same result as once."""
        once = paths.normalize_key(raw)
        assert paths.normalize_key(once) == once


class TestSplitAndJoin:
    """split_key() and join_key()."""

    def test_split_normalizes_first(self) -> None:
        """split_key() normalizes before splitting."""
        assert paths.split_key(" a..b.c ") == ("a", "b", "c")

    def test_split_single_segment(self) -> None:
        """A key without dots gives a single segment."""
        assert paths.split_key("a") == ("a",)

    def test_join(self) -> None:
        """join_key() reverses split_key() for normalized keys."""
        assert paths.join_key(("a", "b", "c")) == "a.b.c"


class TestIsDescendant:
    """is_descendant() prefix matching."""

    def test_same_path(self) -> None:
        """A path counts as its own descendant."""
        assert paths.is_descendant("a.b", "a.b")

    def test_child_path(self) -> None:
        """A deeper path under the ancestor matches."""
        assert paths.is_descendant("a.b.c", "a.b")

    def test_sibling_with_common_prefix(self) -> None:
        """A key that merely starts with the same characters does not match."""
        assert not paths.is_descendant("a.bc", "a.b")

    def test_parent_is_not_descendant(self) -> None:
        """An ancestor is not a descendant of its child."""
        assert not paths.is_descendant("a", "a.b")
