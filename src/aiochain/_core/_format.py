from collections.abc import Iterable, Mapping
from pprint import pformat
from typing import Any


def dict_repr(
    v: Mapping[Any, Any],
    max_items: int = 20,
    depth: int = 3,
    width: int = 80,
    *,
    compact: bool = True,
) -> str:
    truncated = dict(list(v.items())[:max_items])
    suffix = "..." if len(v) > max_items else ""
    return pformat(truncated, depth=depth, width=width, compact=compact) + suffix


def iter_repr(
    v: Iterable[Any],
    max_items: int = 20,
    depth: int = 3,
    width: int = 80,
    *,
    compact: bool = True,
) -> str:
    items = list(v)
    suffix = ", ..." if len(items) > max_items else ""
    body = pformat(items[:max_items], depth=depth, width=width, compact=compact)
    return body[1:-1] + suffix
