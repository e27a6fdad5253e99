"""Hypothesis property-based tests for the combinator laws.

Properties tested:
- Suffix: every Success's remainder is a suffix of its input
- Unit: pure(v) and bind(pure(v), f) == f(v)
- Zero: fail() never consumes and bind(fail(), f) never calls f
- Choice: choice([p, q]) is p's result if p succeeds, else q's
- Restoration: a failed branch never affects the next branch's input
- Termination: repetition of a non-consuming parser terminates
"""

from __future__ import annotations

import pytest
from hypothesis import event, given, settings
from hypothesis import strategies as st

from lexparsec.syntax.parser import (
    Parser,
    any_char,
    bind,
    capture,
    char,
    choice,
    digit,
    fail,
    many,
    many1,
    one_of,
    option,
    optional,
    pure,
    sep_by,
    string,
)
from lexparsec.syntax.result import Failure, Success

# ============================================================================
# HYPOTHESIS STRATEGIES
# ============================================================================

ALPHABET = "ab1,"

inputs = st.text(alphabet=ALPHABET, max_size=30)


def _leaf_parsers() -> st.SearchStrategy[Parser[object]]:
    return st.one_of(
        st.sampled_from(ALPHABET).map(char),
        st.text(alphabet=ALPHABET, min_size=1, max_size=3).map(string),
        st.just(any_char()),
        st.just(digit()),
        st.integers().map(pure),
        st.just(fail("nope")),
    )


def _extend(children: st.SearchStrategy[Parser[object]]) -> st.SearchStrategy[Parser[object]]:
    return st.one_of(
        st.tuples(children, children).map(lambda pq: choice(list(pq))),
        st.tuples(children, children).map(lambda pq: pq[0] >> pq[1]),
        st.tuples(children, children).map(lambda pq: pq[0] << pq[1]),
        children.map(many),
        children.map(many1),
        children.map(optional),
        children.map(lambda p: option(0, p)),
        children.map(capture),
        st.tuples(children, children).map(lambda pq: sep_by(pq[0], pq[1])),
    )


parsers = st.recursive(_leaf_parsers(), _extend, max_leaves=8)


# ============================================================================
# PROPERTY TESTS - CONSUMPTION
# ============================================================================


class TestConsumption:
    """Consumption properties that hold for every parser."""

    @given(parser=parsers, source=inputs)
    @settings(max_examples=300)
    def test_success_remainder_is_suffix(self, parser: Parser[object], source: str) -> None:
        """INVARIANT: A Success's remainder is a suffix of the input."""
        result = parser.parse(source)

        match result:
            case Success(_, rest):
                assert source.endswith(rest.remaining)
                assert rest.pos <= len(source)
                event(f"consumed_all={rest.is_eof}")
            case Failure(reason):
                assert 0 <= reason.pos <= len(source)
                event(f"failure={reason.code.name}")

    @given(parser=parsers, source=inputs)
    def test_parsing_is_deterministic(self, parser: Parser[object], source: str) -> None:
        """PROPERTY: Running a parser twice gives equal results."""
        assert parser.parse(source) == parser.parse(source)


# ============================================================================
# PROPERTY TESTS - MONAD LAWS
# ============================================================================


class TestMonadLaws:
    """pure/bind/fail laws."""

    @given(value=st.integers(), source=inputs)
    def test_pure_consumes_nothing(self, value: int, source: str) -> None:
        """PROPERTY: pure(v) succeeds with v and the whole input."""
        result = pure(value).parse(source)

        assert result.value == value
        assert result.remaining == source

    @given(value=st.sampled_from(ALPHABET), source=inputs)
    def test_left_identity(self, value: str, source: str) -> None:
        """PROPERTY: bind(pure(v), f) behaves like f(v)."""
        assert bind(pure(value), char).parse(source) == char(value).parse(source)

    @given(parser=parsers, source=inputs)
    def test_right_identity(self, parser: Parser[object], source: str) -> None:
        """PROPERTY: bind(p, pure) behaves like p."""
        assert bind(parser, pure).parse(source) == parser.parse(source)

    @given(source=inputs)
    def test_fail_never_consumes(self, source: str) -> None:
        """PROPERTY: fail() fails at the starting position."""
        result = fail("x").parse(source)

        assert isinstance(result, Failure)
        assert result.reason.pos == 0

    @given(source=inputs)
    def test_bind_after_fail_skips_continuation(self, source: str) -> None:
        """PROPERTY: bind(fail(), f) never calls f."""

        def continuation(_: object) -> Parser[object]:
            raise AssertionError("continuation called")

        assert isinstance(bind(fail(), continuation).parse(source), Failure)


# ============================================================================
# PROPERTY TESTS - CHOICE
# ============================================================================


class TestChoiceLaws:
    """Choice and backtracking properties."""

    @given(p=parsers, q=parsers, source=inputs)
    @settings(max_examples=300)
    def test_choice_is_first_success(self, p: Parser[object], q: Parser[object], source: str) -> None:
        """PROPERTY: choice([p, q]) yields p's success, else q's success."""
        first = p.parse(source)
        second = q.parse(source)
        combined = choice([p, q]).parse(source)

        if isinstance(first, Success):
            assert combined == first
            event("branch=first")
        elif isinstance(second, Success):
            assert combined == second
            event("branch=second")
        else:
            assert isinstance(combined, Failure)
            assert combined.reason.causes == (first.reason, second.reason)
            event("branch=none")

    @given(prefix=st.text(alphabet=ALPHABET, min_size=1, max_size=5), source=inputs)
    def test_failed_branch_restores_input(self, prefix: str, source: str) -> None:
        """PROPERTY: A branch failing after partial consumption leaves the input."""
        partial = string(prefix) >> fail("after prefix")

        result = choice([partial, capture(many(any_char()))]).parse(source)

        assert result.value == source


# ============================================================================
# PROPERTY TESTS - TERMINATION
# ============================================================================


class TestTermination:
    """Repetition of non-consuming parsers terminates."""

    @given(parser=parsers, source=inputs)
    def test_many_of_optional_terminates(self, parser: Parser[object], source: str) -> None:
        """PROPERTY: many(optional(p)) always terminates and succeeds."""
        result = many(optional(parser)).parse(source)

        assert isinstance(result, Success)

    @pytest.mark.fuzz
    @given(parser=parsers, source=st.text(alphabet=ALPHABET, max_size=500))
    @settings(max_examples=2000, deadline=None)
    def test_nested_repetition_terminates(self, parser: Parser[object], source: str) -> None:
        """PROPERTY: Deeply nested repetition on long input terminates."""
        result = many(sep_by(many(parser), one_of(","))).parse(source)

        assert isinstance(result, Success)
