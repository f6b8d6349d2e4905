from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass

from ._option import NONE, Option, Some


class Either[L, R](ABC):
    """A value of one of two types.

    By convention `Left` holds a failure and `Right` holds a success,
    see `AsyncLazy.to_either()`.
    """

    __slots__ = ()

    @abstractmethod
    def is_left(self) -> bool: ...

    @abstractmethod
    def is_right(self) -> bool: ...

    @abstractmethod
    def fold[U](self, on_left: Callable[[L], U], on_right: Callable[[R], U]) -> U:
        """Collapse both variants into a single value.

        Example:
        ```python
        >>> from aiochain import Left, Right
        >>> Right(3).fold(str, lambda x: x * 2)
        6
        >>> Left(ValueError("boom")).fold(str, lambda x: x * 2)
        'boom'

        ```
        """
        ...

    def left(self) -> Option[L]:
        return self.fold(Some, lambda _: NONE)

    def right(self) -> Option[R]:
        return self.fold(lambda _: NONE, Some)

    def map[U](self, f: Callable[[R], U]) -> Either[L, U]:
        """Apply **f** to a `Right` value, leaving `Left` untouched."""
        return self.fold(Left, lambda value: Right(f(value)))

    def swap(self) -> Either[R, L]:
        return self.fold(Right, Left)


@dataclass(slots=True)
class Left[L, R](Either[L, R]):
    value: L

    def is_left(self) -> bool:
        return True

    def is_right(self) -> bool:
        return False

    def fold[U](self, on_left: Callable[[L], U], on_right: Callable[[R], U]) -> U:
        return on_left(self.value)


@dataclass(slots=True)
class Right[L, R](Either[L, R]):
    value: R

    def is_left(self) -> bool:
        return False

    def is_right(self) -> bool:
        return True

    def fold[U](self, on_left: Callable[[L], U], on_right: Callable[[R], U]) -> U:
        return on_right(self.value)
