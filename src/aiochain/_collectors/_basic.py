"""Synchronous collectors into Python containers and scalar aggregates."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from .._core import get_config
from .._types import CollisionHandler, MinMax, SupportsRichComparison


def _keep_first[K, V](key: K, old: V, new: V) -> V:  # noqa: ARG001
    return old


class ListCollector[T]:
    """Collects elements into a `list`, in order.

    Example:
    ```python
    >>> from aiochain import ListCollector
    >>> c = ListCollector[int]()
    >>> for x in (3, 1, 2):
    ...     c.collect(x)
    >>> c.result
    [3, 1, 2]
    >>> c
    ListCollector(3, 1, 2)

    ```
    """

    __slots__ = ("_values",)

    def __init__(self) -> None:
        self._values: list[T] = []

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({get_config().iter_repr(self._values)})"

    def collect(self, item: T) -> None:
        self._values.append(item)

    @property
    def result(self) -> list[T]:
        return self._values


class SetCollector[T]:
    __slots__ = ("_values",)

    def __init__(self) -> None:
        self._values: set[T] = set()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({get_config().iter_repr(self._values)})"

    def collect(self, item: T) -> None:
        self._values.add(item)

    @property
    def result(self) -> set[T]:
        return self._values


class DictCollector[K, V]:
    """Collects `(key, value)` pairs into a `dict`.

    On a key collision, **on_collision** is called with `(key, old, new)` and its return value is kept.
    By default the first value seen for a key is kept.

    Args:
        on_collision (CollisionHandler[K, V] | None): Collision policy.
    """

    __slots__ = ("_on_collision", "_values")

    def __init__(self, on_collision: CollisionHandler[K, V] | None = None) -> None:
        self._values: dict[K, V] = {}
        self._on_collision = _keep_first if on_collision is None else on_collision

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({get_config().dict_repr(self._values)})"

    def collect(self, item: tuple[K, V]) -> None:
        key, value = item
        if key in self._values:
            value = self._on_collision(key, self._values[key], value)
        self._values[key] = value

    @property
    def result(self) -> dict[K, V]:
        return self._values


class GroupByCollector[K, V]:
    """Collects `(key, value)` pairs into a `dict` of lists.

    Groups keep first-seen order, and values keep collection order within a group.

    Example:
    ```python
    >>> from aiochain import GroupByCollector
    >>> c = GroupByCollector[str, int]()
    >>> for x in (2, 5, 4, 3, 1):
    ...     c.collect(("even" if x % 2 == 0 else "odd", x))
    >>> c.result
    {'even': [2, 4], 'odd': [5, 3, 1]}

    ```
    """

    __slots__ = ("_groups",)

    def __init__(self) -> None:
        self._groups: dict[K, list[V]] = {}

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({get_config().dict_repr(self._groups)})"

    def collect(self, item: tuple[K, V]) -> None:
        key, value = item
        self._groups.setdefault(key, []).append(value)

    @property
    def result(self) -> dict[K, list[V]]:
        return self._groups


class TallyCollector[T]:
    """Counts occurrences of each element, in first-seen order."""

    __slots__ = ("_counts",)

    def __init__(self) -> None:
        self._counts: dict[T, int] = {}

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({get_config().dict_repr(self._counts)})"

    def collect(self, item: T) -> None:
        self._counts[item] = self._counts.get(item, 0) + 1

    @property
    def result(self) -> dict[T, int]:
        return self._counts


class CountCollector:
    __slots__ = ("_count",)

    def __init__(self) -> None:
        self._count = 0

    def collect(self, item: object) -> None:  # noqa: ARG002
        self._count += 1

    @property
    def result(self) -> int:
        return self._count


class JoinCollector:
    """Joins the `str()` of each element.

    Args:
        separator (str): Inserted between elements.
        prefix (str): Prepended to the result.
        suffix (str): Appended to the result.
    """

    __slots__ = ("_parts", "_prefix", "_separator", "_suffix")

    def __init__(self, separator: str = ",", prefix: str = "", suffix: str = "") -> None:
        self._parts: list[str] = []
        self._separator = separator
        self._prefix = prefix
        self._suffix = suffix

    def collect(self, item: object) -> None:
        self._parts.append(str(item))

    @property
    def result(self) -> str:
        return f"{self._prefix}{self._separator.join(self._parts)}{self._suffix}"


class FirstCollector[T]:
    """Keeps the first element collected, `None` until then."""

    __slots__ = ("_seen", "_value")

    def __init__(self) -> None:
        self._value: T | None = None
        self._seen = False

    def collect(self, item: T) -> None:
        if not self._seen:
            self._seen = True
            self._value = item

    @property
    def result(self) -> T | None:
        return self._value


class LastCollector[T]:
    __slots__ = ("_value",)

    def __init__(self) -> None:
        self._value: T | None = None

    def collect(self, item: T) -> None:
        self._value = item

    @property
    def result(self) -> T | None:
        return self._value


class _ExtremumCollector[T](ABC):
    __slots__ = ("_best", "_best_key", "_key", "_seen")

    def __init__(self, key: Callable[[T], SupportsRichComparison] | None = None) -> None:
        self._key = key
        self._best: T | None = None
        self._best_key: Any = None
        self._seen = False

    @abstractmethod
    def _wins(self, candidate: Any, best: Any) -> bool: ...

    def collect(self, item: T) -> None:
        k = item if self._key is None else self._key(item)
        if not self._seen or self._wins(k, self._best_key):
            self._seen = True
            self._best = item
            self._best_key = k

    @property
    def seen(self) -> bool:
        """Whether anything was collected."""
        return self._seen

    @property
    def result(self) -> T | None:
        return self._best


class MinCollector[T](_ExtremumCollector[T]):
    """Keeps the smallest element, the first one on ties.

    Args:
        key (Callable[[T], SupportsRichComparison] | None): Comparison key, like the builtin `min`.
    """

    __slots__ = ()

    def _wins(self, candidate: Any, best: Any) -> bool:
        return candidate < best


class MaxCollector[T](_ExtremumCollector[T]):
    """Keeps the largest element, the first one on ties."""

    __slots__ = ()

    def _wins(self, candidate: Any, best: Any) -> bool:
        return candidate > best


class MinMaxCollector[T]:
    """Keeps both the smallest and the largest elements.

    The result is `None` if nothing was collected.
    """

    __slots__ = ("_max", "_min")

    def __init__(self, key: Callable[[T], SupportsRichComparison] | None = None) -> None:
        self._min = MinCollector(key)
        self._max = MaxCollector(key)

    def collect(self, item: T) -> None:
        self._min.collect(item)
        self._max.collect(item)

    @property
    def result(self) -> MinMax[T] | None:
        if not self._min.seen:
            return None
        return MinMax(self._min.result, self._max.result)  # type: ignore[arg-type]
