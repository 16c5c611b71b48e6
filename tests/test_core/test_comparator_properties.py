"""Property-based tests for version parsing and ordering.

These tests verify that:
- Parsing is deterministic
- compare_versions is a total order (reflexive, antisymmetric, transitive)
- The Version rich comparisons agree with compare_versions
"""

from __future__ import annotations

import pytest
from hypothesis import given, settings, strategies as st

from lockdiff.core.comparator import Ordering, compare_versions
from lockdiff.core.version_parser import parse_version
from lockdiff.models import PreReleaseCycle, Version


# =============================================================================
# Strategies for generating test data
# =============================================================================

small_numbers = st.integers(min_value=0, max_value=5)
cycle_labels = st.sampled_from(["a", "alpha", "b", "beta", "rc", "c", "pre", "preview"])
separators = st.sampled_from(["", ".", "-", "_"])


@st.composite
def version_text(draw) -> str:
    """Generate a version string covering every optional field."""
    text = ""
    if draw(st.booleans()):
        text += f"{draw(small_numbers)}!"

    segments = draw(st.lists(small_numbers, min_size=1, max_size=4))
    text += ".".join(str(s) for s in segments)

    if draw(st.booleans()):
        text += draw(cycle_labels)
        if draw(st.booleans()):
            text += str(draw(small_numbers))

    if draw(st.booleans()):
        # A bare marker directly after the segments would read as a label
        separator = draw(st.sampled_from([".", "-", "_"]))
        text += f"{separator}{draw(st.sampled_from(['post', 'r', 'rev']))}{draw(small_numbers)}"

    if draw(st.booleans()):
        text += f".dev{draw(small_numbers)}"

    return text


@st.composite
def versions(draw) -> Version:
    """Generate Version values directly, including shapes text cannot reach."""
    pre_release = None
    if draw(st.booleans()):
        pre_release = (draw(st.sampled_from(list(PreReleaseCycle))), draw(small_numbers))
    return Version(
        epoch=draw(st.none() | small_numbers),
        segments=tuple(draw(st.lists(small_numbers, min_size=1, max_size=4))),
        pre_release=pre_release,
        post_release=draw(st.none() | small_numbers),
        dev_release=draw(st.none() | small_numbers),
    )


# =============================================================================
# Parsing properties
# =============================================================================


@pytest.mark.unit
class TestParseProperties:
    """Properties of parse_version over generated strings."""

    @given(text=version_text())
    @settings(max_examples=200)
    def test_parse_is_deterministic(self, text: str) -> None:
        assert parse_version(text) == parse_version(text)

    @given(text=version_text())
    @settings(max_examples=200)
    def test_reparse_compares_equal(self, text: str) -> None:
        assert compare_versions(text, text) is Ordering.EQUAL

    @given(text=version_text(), prefix=st.sampled_from(["", "v", "==", " "]))
    @settings(max_examples=100)
    def test_prefix_is_ignored(self, text: str, prefix: str) -> None:
        assert parse_version(prefix + text) == parse_version(text)


# =============================================================================
# Total order properties
# =============================================================================


@pytest.mark.unit
class TestTotalOrderProperties:
    """compare_versions is a total order over Version values."""

    @given(a=versions())
    def test_reflexive(self, a: Version) -> None:
        assert compare_versions(a, a) is Ordering.EQUAL

    @given(a=versions(), b=versions())
    def test_antisymmetric(self, a: Version, b: Version) -> None:
        assert compare_versions(a, b) is compare_versions(b, a).reverse()

    @given(a=versions(), b=versions())
    def test_equal_means_structurally_equal(self, a: Version, b: Version) -> None:
        assert (compare_versions(a, b) is Ordering.EQUAL) == (a == b)

    @given(a=versions(), b=versions(), c=versions())
    @settings(max_examples=300)
    def test_transitive(self, a: Version, b: Version, c: Version) -> None:
        ab = compare_versions(a, b)
        bc = compare_versions(b, c)
        if ab is Ordering.LESS and bc is Ordering.LESS:
            assert compare_versions(a, c) is Ordering.LESS
        if ab is not Ordering.GREATER and bc is not Ordering.GREATER:
            assert compare_versions(a, c) is not Ordering.GREATER

    @given(a=versions(), b=versions())
    def test_operators_agree(self, a: Version, b: Version) -> None:
        ordering = compare_versions(a, b)

        assert (a < b) == (ordering is Ordering.LESS)
        assert (a > b) == (ordering is Ordering.GREATER)
        assert (a <= b) == (ordering is not Ordering.GREATER)
        assert (a >= b) == (ordering is not Ordering.LESS)
