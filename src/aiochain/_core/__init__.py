from ._config import Config, get_config, set_config
from ._errors import (
    AiochainError,
    InvalidIterableError,
    InvalidSizeError,
    LazyMapperError,
)
from ._main import CommonBase, Pipeable

__all__ = [
    "AiochainError",
    "CommonBase",
    "Config",
    "InvalidIterableError",
    "InvalidSizeError",
    "LazyMapperError",
    "Pipeable",
    "get_config",
    "set_config",
]
