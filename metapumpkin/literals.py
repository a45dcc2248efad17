"""Encoding of Python values as literal source text for generated scripts."""
from __future__ import annotations

import json
import math
import numbers
from typing import Any

import numpy as np

from .errors import Err, PumpkinError


def _scalar_literal(value: Any) -> str:
    if isinstance(value, numbers.Integral):
        return repr(int(value))
    number = float(value)
    # repr of inf/nan is not valid source text
    if not math.isfinite(number):
        raise PumpkinError(Err.ENCODING, {"value": value, "reason": "non-finite number"})
    return repr(number)


def to_literal(value: Any) -> str:
    """Convert VALUE into source text that evaluates back to the same value.

    Strings are double quoted, scalars use their shortest round-tripping
    decimal text and 1-D numeric vectors become a bracketed list.
    """
    if isinstance(value, str):
        return json.dumps(value)
    if isinstance(value, (bool, np.bool_)):
        raise PumpkinError(Err.ENCODING, {"value": value, "type": type(value).__name__})
    if isinstance(value, numbers.Real):
        return _scalar_literal(value)
    if isinstance(value, (list, tuple, np.ndarray)):
        array = np.asarray(value)
        if array.ndim == 0 and np.issubdtype(array.dtype, np.number):
            return _scalar_literal(array.item())
        if array.ndim != 1 or not np.issubdtype(array.dtype, np.number):
            raise PumpkinError(Err.ENCODING, {"value": value, "shape": array.shape, "dtype": str(array.dtype)})
        return "[" + ", ".join(_scalar_literal(item) for item in array.tolist()) + "]"
    raise PumpkinError(Err.ENCODING, {"value": value, "type": type(value).__name__})
