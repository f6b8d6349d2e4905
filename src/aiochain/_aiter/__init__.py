from ._coerce import as_async_iterator, to_async, to_async_iterator
from ._main import AsyncIter, async_iter, empty, singleton
from ._ranges import loop, range_, repeat

__all__ = [
    "AsyncIter",
    "as_async_iterator",
    "async_iter",
    "empty",
    "loop",
    "range_",
    "repeat",
    "singleton",
    "to_async",
    "to_async_iterator",
]
