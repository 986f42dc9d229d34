"""Result containers for railway-oriented error handling.

Two forms are provided:

- `Result`, the unit form: success carries nothing, failure carries an `Error`.
- `ValueResult[T]`, the value form: success carries a `T`, failure an `Error`.

Both enforce the same invariant: a success never holds an error and a failure
always holds one. Reading `value` on a failure, or `error` on a success, is a
programming mistake and raises `ResultMisuseError`, which is *not* part of the
domain error vocabulary and should never be caught as a business outcome.

Example:
    >>> ValueResult.success(2).map(lambda v: v * 10).value
    20
    >>> failed = ValueResult.failure(Error.failure("boom"))
    >>> failed.map(lambda v: v * 10).error.code
    'FAILURE'
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, Generic, TypeVar

from .error import CompositeError, Error

T = TypeVar("T")
U = TypeVar("U")
R = TypeVar("R")


class ResultMisuseError(RuntimeError):
    """Raised when a result is built or read in a way its state forbids."""


def _coerce_error(error: Error | str, message: str | None) -> Error:
    if isinstance(error, Error):
        if message is not None:
            raise TypeError("message is only accepted together with a string code")
        return error
    if message is None:
        return Error(message=error)
    return Error(error, message)


class BaseResult:
    """State shared by both result forms."""

    __slots__ = ("_is_success", "_error")

    def __init__(self, is_success: bool, error: Error | None) -> None:
        if is_success and error is not None:
            raise ResultMisuseError("Cannot have error on success result")
        if not is_success and error is None:
            raise ResultMisuseError("Must have error on failure result")
        self._is_success = is_success
        self._error = error

    @property
    def is_success(self) -> bool:
        return self._is_success

    @property
    def is_failure(self) -> bool:
        return not self._is_success

    @property
    def error(self) -> Error:
        """The failure's error.

        Raises:
            ResultMisuseError: If the result is a success.
        """
        if self._error is None:
            raise ResultMisuseError("Cannot access error on success result")
        return self._error


class Result(BaseResult):
    """Outcome of an operation that produces no value."""

    __slots__ = ()

    # --- Construction ---

    @classmethod
    def success(cls) -> Result:
        return cls(True, None)

    @classmethod
    def failure(cls, error: Error | str, message: str | None = None) -> Result:
        """Build a failed result.

        Accepts an `Error`, a bare message, or a `(code, message)` pair.
        """
        return cls(False, _coerce_error(error, message))

    @classmethod
    def combine(cls, *results: BaseResult) -> Result:
        """Succeed iff every input succeeded.

        All failing inputs are reported, in input order, inside a single
        `CompositeError`.
        """
        errors = [r.error for r in results if r.is_failure]
        if errors:
            return cls.failure(CompositeError(*errors))
        return cls.success()

    # --- Combinators ---

    def map(self, fn: Callable[[], U]) -> ValueResult[U]:
        """Lift a success into a value result by calling `fn`."""
        if self.is_failure:
            return ValueResult.failure(self.error)
        return ValueResult.success(fn())

    def bind(self, fn: Callable[[], Result]) -> Result:
        """Run the next unit step only if this one succeeded."""
        if self.is_failure:
            return self
        return fn()

    def match(self, on_success: Callable[[], R], on_failure: Callable[[Error], R]) -> R:
        if self.is_success:
            return on_success()
        return on_failure(self.error)

    def tap(self, fn: Callable[[], Any]) -> Result:
        if self.is_success:
            fn()
        return self

    def tap_error(self, fn: Callable[[Error], Any]) -> Result:
        if self.is_failure:
            fn(self.error)
        return self

    # --- Dunder ---

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Result):
            return NotImplemented
        return (self._is_success, self._error) == (other._is_success, other._error)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        if self.is_success:
            return "Result.success()"
        return f"Result.failure({self._error!r})"


class ValueResult(BaseResult, Generic[T]):
    """Outcome of an operation that produces a `T` on success."""

    __slots__ = ("_value",)

    def __init__(self, is_success: bool, value: T | None, error: Error | None) -> None:
        super().__init__(is_success, error)
        if not is_success and value is not None:
            raise ResultMisuseError("Cannot have value on failure result")
        self._value = value

    # --- Construction ---

    @classmethod
    def success(cls, value: T) -> ValueResult[T]:
        return cls(True, value, None)

    @classmethod
    def failure(cls, error: Error | str, message: str | None = None) -> ValueResult[T]:
        """Build a failed result.

        Accepts an `Error`, a bare message, or a `(code, message)` pair.
        """
        return cls(False, None, _coerce_error(error, message))

    @classmethod
    def of(cls, value: T | None) -> ValueResult[T]:
        """Wrap `value`, treating `None` as a `NULL_VALUE` failure."""
        if value is None:
            return cls.failure("NULL_VALUE", "Value cannot be null")
        return cls.success(value)

    @classmethod
    def try_call(
        cls,
        fn: Callable[[], T],
        error_handler: Callable[[Exception], Error | None] | None = None,
    ) -> ValueResult[T]:
        """Call `fn`, turning a raised exception into a failure.

        `error_handler` may translate the exception; when it is absent or
        returns `None` the failure uses code `EXCEPTION` and the exception text.
        """
        try:
            return cls.success(fn())
        except ResultMisuseError:
            raise
        except Exception as exc:  # pylint: disable=broad-except
            return cls.failure(_error_from_exception(exc, error_handler))

    @classmethod
    async def try_call_async(
        cls,
        fn: Callable[[], Awaitable[T]],
        error_handler: Callable[[Exception], Error | None] | None = None,
    ) -> ValueResult[T]:
        """Asynchronous counterpart of `try_call`."""
        try:
            return cls.success(await fn())
        except ResultMisuseError:
            raise
        except Exception as exc:  # pylint: disable=broad-except
            return cls.failure(_error_from_exception(exc, error_handler))

    @staticmethod
    def combine_values(*results: ValueResult[Any]) -> ValueResult[tuple[Any, ...]]:
        """Collect the values of several results; the first failure wins."""
        for result in results:
            if result.is_failure:
                return ValueResult.failure(result.error)
        return ValueResult.success(tuple(r.value for r in results))

    # --- Access ---

    @property
    def value(self) -> T:
        """The success value.

        Raises:
            ResultMisuseError: If the result is a failure.
        """
        if self.is_failure:
            raise ResultMisuseError("Cannot access value on failure result")
        return self._value  # type: ignore[return-value]

    def get_value_or_default(self, default: T | None = None) -> T | None:
        return self._value if self.is_success else default

    def to_unit(self) -> Result:
        """Drop the value, keeping only success/failure."""
        if self.is_failure:
            return Result.failure(self.error)
        return Result.success()

    # --- Combinators ---

    def map(self, fn: Callable[[T], U]) -> ValueResult[U]:
        """Transform the success value; failures pass through untouched."""
        if self.is_failure:
            return ValueResult.failure(self.error)
        return ValueResult.success(fn(self.value))

    def bind(self, fn: Callable[[T], ValueResult[U]]) -> ValueResult[U]:
        """Sequence a fallible step; failures short-circuit."""
        if self.is_failure:
            return ValueResult.failure(self.error)
        return fn(self.value)

    def match(self, on_success: Callable[[T], R], on_failure: Callable[[Error], R]) -> R:
        if self.is_success:
            return on_success(self.value)
        return on_failure(self.error)

    def tap(self, fn: Callable[[T], Any]) -> ValueResult[T]:
        if self.is_success:
            fn(self.value)
        return self

    def tap_error(self, fn: Callable[[Error], Any]) -> ValueResult[T]:
        if self.is_failure:
            fn(self.error)
        return self

    def ensure(self, predicate: Callable[[T], bool], error: Error | str) -> ValueResult[T]:
        """Fail with `error` when the success value does not satisfy `predicate`."""
        if self.is_failure:
            return self
        if predicate(self.value):
            return self
        return ValueResult.failure(_coerce_error(error, None))

    def unless(self, predicate: Callable[[T], bool], error: Error | str) -> ValueResult[T]:
        """Fail with `error` when the success value satisfies `predicate`."""
        return self.ensure(lambda value: not predicate(value), error)

    def compensate(self, fn: Callable[[Error], ValueResult[T]]) -> ValueResult[T]:
        """Give a failure a chance to recover."""
        if self.is_failure:
            return fn(self.error)
        return self

    # --- Async combinators ---

    async def map_async(self, fn: Callable[[T], Awaitable[U]]) -> ValueResult[U]:
        if self.is_failure:
            return ValueResult.failure(self.error)
        return ValueResult.success(await fn(self.value))

    async def bind_async(
        self, fn: Callable[[T], Awaitable[ValueResult[U]]]
    ) -> ValueResult[U]:
        if self.is_failure:
            return ValueResult.failure(self.error)
        return await fn(self.value)

    async def tap_async(self, fn: Callable[[T], Awaitable[Any]]) -> ValueResult[T]:
        if self.is_success:
            await fn(self.value)
        return self

    async def tap_error_async(
        self, fn: Callable[[Error], Awaitable[Any]]
    ) -> ValueResult[T]:
        if self.is_failure:
            await fn(self.error)
        return self

    # --- Dunder ---

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValueResult):
            return NotImplemented
        return (self._is_success, self._value, self._error) == (
            other._is_success,
            other._value,
            other._error,
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        if self.is_success:
            return f"ValueResult.success({self._value!r})"
        return f"ValueResult.failure({self._error!r})"


async def bind_chain(
    first: Awaitable[ValueResult[Any]],
    *binders: Callable[[Any], Awaitable[ValueResult[Any]]],
) -> ValueResult[Any]:
    """Await `first`, then feed each success value to the next binder in turn.

    Binders run strictly one after another; the first failure is returned and
    no later binder is called.
    """
    result = await first
    for binder in binders:
        if result.is_failure:
            break
        result = await binder(result.value)
    return result


def _error_from_exception(
    exc: Exception, error_handler: Callable[[Exception], Error | None] | None
) -> Error:
    if error_handler is not None and (error := error_handler(exc)) is not None:
        return error
    return Error("EXCEPTION", str(exc) or type(exc).__name__)
