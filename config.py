from __future__ import annotations
import logging
import os
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, replace
from typing import Iterator, Optional

import numpy as np

from errors import IntegerOverflow

logger = logging.getLogger(__name__)

ENV_INT_BITS = "RATIONAL_INT_BITS"
SUPPORTED_WIDTHS = (8, 16, 32, 64)


@dataclass(frozen=True)
class Settings:
    # None means unbounded python ints; otherwise values are checked against
    # the range of a signed integer of that many bits
    int_bits: Optional[int] = None

    def __post_init__(self) -> None:
        if self.int_bits is not None and self.int_bits not in SUPPORTED_WIDTHS:
            raise ValueError(
                f"int_bits must be one of {SUPPORTED_WIDTHS} or None, got {self.int_bits!r}"
            )

    def bounds(self) -> Optional[np.iinfo]:
        if self.int_bits is None:
            return None
        return np.iinfo(f"int{self.int_bits}")


def _from_env() -> Settings:
    raw = os.environ.get(ENV_INT_BITS, "").strip()
    if not raw:
        return Settings()
    try:
        bits = int(raw)
    except ValueError:
        raise ValueError(f"{ENV_INT_BITS} must be an integer, got {raw!r}") from None
    return Settings(int_bits=bits)


_current: ContextVar[Settings] = ContextVar("rational_settings", default=_from_env())


def get_settings() -> Settings:
    return _current.get()


def configure(**changes) -> Settings:
    new = replace(_current.get(), **changes)
    _current.set(new)
    logger.debug("arithmetic settings now %s", new)
    return new


@contextmanager
def settings(**changes) -> Iterator[Settings]:
    token = _current.set(replace(_current.get(), **changes))
    try:
        yield _current.get()
    finally:
        _current.reset(token)


def check_width(*values: int) -> None:
    info = _current.get().bounds()
    if info is None:
        return
    for v in values:
        if v < info.min or v > info.max:
            raise IntegerOverflow(v, info.bits)
