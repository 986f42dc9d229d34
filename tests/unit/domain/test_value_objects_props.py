"""Hypothesis property tests for `Money`.

- **Form equivalence**: for any input, `Money.create` raises exactly when
  `Money.try_create` fails, and the exception carries the same code.
- **No silent conversion**: arithmetic between different currencies always
  fails, in both forms.
- **Never negative**: subtraction either succeeds with a non-negative amount or
  fails with INSUFFICIENT_FUNDS.
"""

from __future__ import annotations

from decimal import Decimal

import pytest
from hypothesis import given
from hypothesis import strategies as st

from twotrack.domain.errors import DomainError
from twotrack.domain.value_objects import VALID_CURRENCY_CODES, Money

pytestmark = [pytest.mark.property]

currencies = st.sampled_from(sorted(VALID_CURRENCY_CODES))
amounts = st.decimals(min_value=0, max_value=10**9, places=2, allow_nan=False)
raw_amounts = st.one_of(
    st.decimals(allow_nan=True, allow_infinity=True),
    st.integers(min_value=-(10**6), max_value=10**6),
    st.text(max_size=6),
)
raw_currencies = st.one_of(currencies, st.text(max_size=4))


@given(raw_amounts, raw_currencies)
def test_strict_and_safe_creation_agree(amount, currency) -> None:
    result = Money.try_create(amount, currency)
    if result.is_success:
        assert Money.create(amount, currency) == result.value
    else:
        with pytest.raises(DomainError) as excinfo:
            Money.create(amount, currency)
        assert excinfo.value.code == result.error.code
        assert excinfo.value.category is result.error.type


@given(amounts, amounts, currencies, currencies)
def test_mixed_currencies_never_combine(a, b, left, right) -> None:
    if left == right:
        return
    x, y = Money.create(a, left), Money.create(b, right)
    for verb in ("add", "subtract"):
        assert getattr(x, f"try_{verb}")(y).error.code == "BUSINESS_RULE_CURRENCY_MISMATCH"
        with pytest.raises(DomainError):
            getattr(x, verb)(y)


@given(amounts, amounts, currencies)
def test_subtraction_never_goes_negative(a, b, currency) -> None:
    result = Money.create(a, currency).try_subtract(Money.create(b, currency))
    if a >= b:
        assert result.value.amount == a - b >= Decimal(0)
    else:
        assert result.error.code == "BUSINESS_RULE_INSUFFICIENT_FUNDS"
