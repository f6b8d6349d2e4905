from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from ._format import dict_repr, iter_repr


@dataclass(slots=True, frozen=True)
class Config:
    """Process-wide display settings.

    Only affects `__repr__` output of the library objects holding materialized data
    (evaluated `AsyncLazy` values, collectors).

    Attributes:
        repr_max_items (int): Maximum number of items shown before truncating with `...`.
        repr_depth (int): Maximum nesting depth rendered by `pprint`.
        repr_width (int): Target line width rendered by `pprint`.
    """

    repr_max_items: int = 20
    repr_depth: int = 3
    repr_width: int = 80

    def dict_repr(self, v: Mapping[Any, Any]) -> str:
        return dict_repr(
            v, self.repr_max_items, self.repr_depth, self.repr_width, compact=True
        )

    def iter_repr(self, v: Iterable[Any]) -> str:
        return iter_repr(
            v, self.repr_max_items, self.repr_depth, self.repr_width, compact=True
        )


_CONFIG = Config()


def get_config() -> Config:
    """Get the current configuration.

    Returns:
        Config: The active configuration.

    Example:
    ```python
    >>> import aiochain as ac
    >>> ac.get_config().repr_max_items
    20

    ```
    """
    return _CONFIG


def set_config(**changes: Any) -> Config:
    """Replace fields of the current configuration.

    Args:
        **changes (Any): Field names of `Config` and their new values.

    Returns:
        Config: The new active configuration.

    Raises:
        TypeError: If a field name is unknown.
    """
    global _CONFIG  # noqa: PLW0603
    _CONFIG = dataclasses.replace(_CONFIG, **changes)
    return _CONFIG
