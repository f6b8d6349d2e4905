from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Never


class OptionUnwrapError(RuntimeError): ...


class Option[T](ABC):
    """Presence or absence of a value.

    `AsyncLazy.to_option()` and `AsyncIter.next()` return this type.
    """

    __slots__ = ()

    @staticmethod
    def from_[U](value: U | None) -> Option[U]:
        """Wrap a value that may be `None`.

        Args:
            value (U | None): The value to wrap.

        Returns:
            Option[U]: `Some(value)` if value is not `None`, `NONE` otherwise.

        Example:
        ```python
        >>> from aiochain import Option
        >>> Option.from_(1)
        Some(value=1)
        >>> Option.from_(None)
        NONE

        ```
        """
        return NONE if value is None else Some(value)

    @abstractmethod
    def is_some(self) -> bool:
        """
        Returns `True` if the option is a `Some` value.

        Example:
            ```python
            >>> from aiochain import Some, NONE
            >>> Some(2).is_some()
            True
            >>> NONE.is_some()
            False

            ```
        """
        ...

    @abstractmethod
    def is_none(self) -> bool:
        """Returns `True` if the option is a `None` value."""
        ...

    @abstractmethod
    def unwrap(self) -> T:
        """
        Returns the contained `Some` value.

        Raises:
            OptionUnwrapError: If the option is `None`.

        Example:
            ```python
            >>> from aiochain import Some, NONE
            >>> Some("car").unwrap()
            'car'
            >>> NONE.unwrap()
            Traceback (most recent call last):
                ...
            aiochain._results._option.OptionUnwrapError: called `unwrap` on a `None`

            ```
        """
        ...

    def expect(self, msg: str) -> T:
        """
        Returns the contained `Some` value, or raises with a provided message if the value is `None`.

        Args:
            msg: The message to include in the exception if the result is `None`.

        Raises:
            OptionUnwrapError: If the result is `None`.
        """
        if self.is_some():
            return self.unwrap()
        msg = f"{msg} (called `expect` on a `None`)"
        raise OptionUnwrapError(msg)

    def unwrap_or(self, default: T) -> T:
        """
        Returns the contained `Some` value or a provided default.

        Example:
            ```python
            >>> from aiochain import Some, NONE
            >>> Some("car").unwrap_or("bike")
            'car'
            >>> NONE.unwrap_or("bike")
            'bike'

            ```
        """
        return self.unwrap() if self.is_some() else default

    def unwrap_or_else(self, f: Callable[[], T]) -> T:
        """Returns the contained `Some` value or computes it from **f**."""
        return self.unwrap() if self.is_some() else f()

    def map[U](self, f: Callable[[T], U]) -> Option[U]:
        """
        Maps an `Option[T]` to `Option[U]` by applying a function to a contained `Some` value.

        Example:
            ```python
            >>> from aiochain import Some, NONE
            >>> Some("Hello, World!").map(len)
            Some(value=13)
            >>> NONE.map(len)
            NONE

            ```
        """
        if self.is_some():
            return Some(f(self.unwrap()))
        return NONE

    def and_then[U](self, f: Callable[[T], Option[U]]) -> Option[U]:
        """Calls **f** if the option is `Some`, otherwise returns `None`."""
        if self.is_some():
            return f(self.unwrap())
        return NONE

    def or_else(self, f: Callable[[], Option[T]]) -> Option[T]:
        """Returns the option if it contains a value, otherwise calls **f**."""
        return self if self.is_some() else f()


@dataclass(slots=True)
class Some[T](Option[T]):
    """Option variant representing the presence of a value."""

    value: T

    def is_some(self) -> bool:
        return True

    def is_none(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value


@dataclass(slots=True)
class NoneOption(Option[Any]):
    """Option variant representing the absence of a value."""

    def __repr__(self) -> str:
        return "NONE"

    def is_some(self) -> bool:
        return False

    def is_none(self) -> bool:
        return True

    def unwrap(self) -> Never:
        raise OptionUnwrapError("called `unwrap` on a `None`")


NONE: Option[Any] = NoneOption()
"""Singleton instance representing the absence of a value."""
