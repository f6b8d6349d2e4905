from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Never, cast

from ._either import Either, Left, Right
from ._option import NONE, Option, Some


class ResultUnwrapError(RuntimeError): ...


class Result[T, E](ABC):
    """Outcome of a computation: `Ok(value)` or `Err(error)`.

    Used as the memoized outcome of an `AsyncLazy` and as the per-element outcome of `AwaitableIter.all_settled()`.
    """

    __slots__ = ()

    @abstractmethod
    def is_ok(self) -> bool:
        """
        Returns True if the result is Ok.

        Equivalent to Rust's Result::is_ok().
        """
        ...

    @abstractmethod
    def is_err(self) -> bool:
        """
        Returns True if the result is Err.

        Equivalent to Rust's Result::is_err().
        """
        ...

    @abstractmethod
    def unwrap(self) -> T:
        """
        Returns the contained Ok value, or raises ResultUnwrapError if the result is Err.

        Equivalent to Rust's Result::unwrap().
        """
        ...

    @abstractmethod
    def unwrap_err(self) -> E:
        """
        Returns the contained Err value, or raises ResultUnwrapError if the result is Ok.

        Equivalent to Rust's Result::unwrap_err().
        """
        ...

    def map_or_else[U](self, ok: Callable[[T], U], err: Callable[[E], U]) -> U:
        """
        Pattern matches on the result, calling ok if Ok, or err if Err.

        Equivalent to Rust's Result::map_or_else()
        """
        if self.is_ok():
            return ok(self.unwrap())
        return err(self.unwrap_err())

    def expect(self, msg: str) -> T:
        """
        Returns the contained Ok value, or raises ResultUnwrapError with a custom message if the result is Err.

        Args:
            msg: The message to display if the result is Err.

        Raises:
            ResultUnwrapError: If the result is Err, with the provided message and error.
        """
        if self.is_ok():
            return self.unwrap()
        raise ResultUnwrapError(f"{msg}: {self.unwrap_err()}")

    def unwrap_or(self, default: T) -> T:
        """
        Returns the contained Ok value or a provided default.

        Equivalent to Rust's Result::unwrap_or().
        """
        return self.unwrap() if self.is_ok() else default

    def map[U](self, f: Callable[[T], U]) -> Result[U, E]:
        """
        Maps a Result[T, E] to Result[U, E] by applying a function to a contained Ok value, leaving Err untouched.

        Example:
        ```python
        >>> from aiochain import Ok, Err
        >>> Ok(2).map(lambda x: x + 1)
        Ok(value=3)
        >>> Err("nope").map(lambda x: x + 1)
        Err(error='nope')

        ```
        """
        if self.is_ok():
            return Ok(f(self.unwrap()))
        return cast(Result[U, E], self)

    def map_err[F](self, f: Callable[[E], F]) -> Result[T, F]:
        """
        Maps a Result[T, E] to Result[T, F] by applying a function to a contained Err value, leaving Ok untouched.

        Equivalent to Rust's Result::map_err().
        """
        if self.is_err():
            return Err(f(self.unwrap_err()))
        return cast(Result[T, F], self)

    def and_then[U](self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """
        Calls f if the result is Ok, otherwise returns Err.

        Equivalent to Rust's Result::and_then().
        """
        if self.is_ok():
            return f(self.unwrap())
        return cast(Result[U, E], self)

    def ok(self) -> Option[T]:
        """
        Converts the Result into an Option, mapping Ok(v) to Some(v) and Err(e) to None.

        Equivalent to Rust's Result::ok().
        """
        if self.is_ok():
            return Some(self.unwrap())
        return NONE

    def err(self) -> Option[E]:
        """
        Converts the Result into an Option, mapping Err(e) to Some(e) and Ok(v) to None.

        Equivalent to Rust's Result::err().
        """
        if self.is_err():
            return Some(self.unwrap_err())
        return NONE

    def to_either(self) -> Either[E, T]:
        """Converts the Result into an Either, mapping Ok(v) to Right(v) and Err(e) to Left(e).

        Example:
        ```python
        >>> from aiochain import Ok, Err
        >>> Ok(1).to_either()
        Right(value=1)
        >>> Err("boom").to_either()
        Left(value='boom')

        ```
        """
        if self.is_ok():
            return Right(self.unwrap())
        return Left(self.unwrap_err())

    def get_or_raise[X: BaseException](self: Result[T, X]) -> T:
        """Returns the contained Ok value, or raises the contained exception if the result is Err.

        Unlike `unwrap`, the exception itself is raised, not wrapped in `ResultUnwrapError`.

        Raises:
            X: The contained exception.
        """
        if self.is_ok():
            return self.unwrap()
        raise self.unwrap_err()


@dataclass(slots=True)
class Ok[T, E](Result[T, E]):
    """Represents a successful value."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def unwrap_err(self) -> Never:
        raise ResultUnwrapError("called `unwrap_err` on Ok")


@dataclass(slots=True)
class Err[T, E](Result[T, E]):
    """Represents an error value."""

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> Never:
        raise ResultUnwrapError(f"called `unwrap` on Err: {self.error!r}")

    def unwrap_err(self) -> E:
        return self.error
