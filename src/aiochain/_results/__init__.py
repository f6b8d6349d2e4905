from ._either import Either, Left, Right
from ._option import NONE, NoneOption, Option, OptionUnwrapError, Some
from ._result import Err, Ok, Result, ResultUnwrapError

__all__ = [
    "NONE",
    "Either",
    "Err",
    "Left",
    "NoneOption",
    "Ok",
    "Option",
    "OptionUnwrapError",
    "Result",
    "ResultUnwrapError",
    "Right",
    "Some",
]
