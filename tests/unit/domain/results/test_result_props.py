"""Hypothesis property tests for result containers.

- **Exclusive state**: every result is exactly one of success or failure, and
  reading the other side raises `ResultMisuseError`.
- **Bind short-circuit**: in a chain of binds, the steps after the first
  failing one never run and the chain ends in that step's error.
- **Map under failure**: mapping a failure never calls the function.
- **Combine order**: `Result.combine` reports failures in input order.
"""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from twotrack.domain.results import (
    CompositeError,
    Error,
    ErrorType,
    Result,
    ResultMisuseError,
    ValueResult,
)

pytestmark = [pytest.mark.property]

errors = st.builds(
    Error,
    st.text(alphabet="ABCDEFGHIJKLMNOPQRSTUVWXYZ_", min_size=1, max_size=12),
    st.text(min_size=1, max_size=30),
    st.sampled_from(ErrorType),
)
value_results = st.one_of(
    st.integers().map(ValueResult.success),
    errors.map(ValueResult.failure),
)


@given(value_results)
def test_exactly_one_side_is_readable(result: ValueResult[int]) -> None:
    assert result.is_success != result.is_failure
    if result.is_success:
        with pytest.raises(ResultMisuseError):
            _ = result.error
    else:
        with pytest.raises(ResultMisuseError):
            _ = result.value


@given(n=st.integers(min_value=1, max_value=20), data=st.data())
def test_bind_stops_at_first_failing_step(n: int, data: st.DataObject) -> None:
    failing = data.draw(st.integers(min_value=1, max_value=n), label="failing step")
    calls: list[int] = []

    def step(k: int):
        def _run(value: int) -> ValueResult[int]:
            calls.append(k)
            if k == failing:
                return ValueResult.failure(Error(f"STEP_{k}", "step failed"))
            return ValueResult.success(value + 1)

        return _run

    result = ValueResult.success(0)
    for k in range(1, n + 1):
        result = result.bind(step(k))

    assert calls == list(range(1, failing + 1))
    assert result.error == Error(f"STEP_{failing}", "step failed")


@given(errors)
def test_map_never_calls_fn_on_failure(error: Error) -> None:
    def explode(_: object) -> None:
        raise AssertionError("map called its function on a failure")

    result = ValueResult.failure(error).map(explode)
    assert result.error is error


@given(st.lists(st.one_of(st.none(), errors), min_size=1, max_size=8))
def test_combine_keeps_failures_in_input_order(outcomes: list[Error | None]) -> None:
    results = [Result.success() if e is None else Result.failure(e) for e in outcomes]
    combined = Result.combine(*results)
    failures = [e for e in outcomes if e is not None]
    if not failures:
        assert combined.is_success
    else:
        assert isinstance(combined.error, CompositeError)
        assert list(combined.error.errors) == failures
