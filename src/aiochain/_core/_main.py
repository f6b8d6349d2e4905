from __future__ import annotations

from abc import ABC
from collections.abc import Callable
from typing import Concatenate, Self


class Pipeable:
    """Mixin class providing pipeable methods for fluent chaining."""

    __slots__ = ()

    def into[**P, R](
        self,
        func: Callable[Concatenate[Self, P], R],
        *args: P.args,
        **kwargs: P.kwargs,
    ) -> R:
        """Convert `Self` to `R`.

        This method allows to pipe the instance into an object or function that can convert `Self` into another type.

        Conceptually, this allow to do `x.into(f)` instead of `f(x)`, hence keeping a fluent chaining style.

        Args:
            func (Callable[Concatenate[Self, P], R]): Function for conversion.
            *args (P.args): Positional arguments to pass to **func**.
            **kwargs (P.kwargs): Keyword arguments to pass to **func**.

        Returns:
            R: The converted value.

        Example:
        ```python
        >>> import asyncio
        >>> import aiochain as ac
        >>> async def doubled(it: ac.AsyncIter[int]) -> list[int]:
        ...     return await it.map(lambda x: x * 2).collect()
        >>>
        >>> asyncio.run(ac.AsyncIter.from_([1, 2, 3]).into(doubled))
        [2, 4, 6]

        ```
        """
        return func(self, *args, **kwargs)

    def inspect[**P](
        self,
        func: Callable[Concatenate[Self, P], object],
        *args: P.args,
        **kwargs: P.kwargs,
    ) -> Self:
        """Pass `Self` to **func** to perform side effects without altering the data.

        The wrapped sequence is not pulled: **func** receives the wrapper itself.

        Args:
            func (Callable[Concatenate[Self, P], object]): Function to apply to the instance for side effects.
            *args (P.args): Positional arguments to pass to **func**.
            **kwargs (P.kwargs): Keyword arguments to pass to **func**.

        Returns:
            Self: The instance itself, unchanged.

        Example:
        ```python
        >>> import aiochain as ac
        >>> _ = ac.AsyncLazy.create(lambda: 42).inspect(print)
        AsyncLazy(<not evaluated>)

        ```
        """
        func(self, *args, **kwargs)
        return self


class CommonBase[T](ABC, Pipeable):
    """Base class for all wrappers.

    Holds exactly one underlying object, exposed through `inner()`.

    Args:
        data (T): The underlying data to wrap.
    """

    _inner: T

    __slots__ = ("_inner",)

    def __init__(self, data: T) -> None:
        self._inner = data

    def inner(self) -> T:
        """Get the underlying data.

        This is a terminal operation that ends the chain.

        Returns:
            T: The underlying data.
        """
        return self._inner
