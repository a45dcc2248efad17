from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any

import numpy as np


class Err(Enum):
    INVALID_CONFIG = auto()  # stem style, colormap, colors, parameter keys
    SEQUENCE = auto()  # section order or missing colormap
    ENCODING = auto()  # value has no literal form
    UNKNOWN_CONSTANT = auto()


def _describe(value: Any) -> str:
    # Mesh-sized arrays are summarized, never dumped
    if isinstance(value, np.ndarray):
        return f"<{value.dtype} array {value.shape}>"
    return repr(value)


@dataclass(eq=False)
class PumpkinError(Exception):
    """Fatal error raised while generating a pumpkin script.

    The message reads CODE: key=value, ...: reason: cause, where reason is
    the human-readable "reason" entry of ctx.
    """

    code: Err
    ctx: dict[str, Any] | None = None
    cause: Exception | None = None

    def __post_init__(self) -> None:
        if self.ctx is None:
            self.ctx = {}
        if self.cause is not None:
            self.__cause__ = self.cause
        super().__init__(self.code.name)

    @property
    def reason(self) -> str | None:
        return self.ctx.get("reason")

    def __str__(self) -> str:
        parts = [self.code.name]
        details = [f"{key}={_describe(value)}" for key, value in self.ctx.items() if key != "reason"]
        if details:
            parts.append(", ".join(details))
        if self.reason:
            parts.append(str(self.reason))
        if self.cause is not None:
            parts.append(str(self.cause))
        return ": ".join(parts)
