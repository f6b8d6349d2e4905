class AiochainError(Exception):
    """Base class for errors raised by aiochain itself."""


class InvalidIterableError(AiochainError, TypeError):
    """Raised when a source cannot be coerced into an async iterator."""


class InvalidSizeError(AiochainError, ValueError):
    """Raised when a batch size is not a non-negative integer."""


class LazyMapperError(AiochainError, TypeError):
    """Raised when `AsyncLazy.flat_map` mapper does not return an `AsyncLazy`."""
