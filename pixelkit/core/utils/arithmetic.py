"""
Arithmetic helpers for channel math.

All helpers accept scalars or NumPy arrays and work element-wise, so the
same pixel mapper can run on one pixel or on a whole channel plane.
"""

import math
from typing import Union

import numpy as np

from pixelkit.core.constants import ChannelConstants

Number = Union[int, float, np.ndarray]


def round_half_up(value: Number) -> Number:
    """
    Round to the nearest integer, halves away from zero for positive values.

    Python's round() and np.rint() round halves to even, which would make
    results depend on the parity of the operand.
    """
    if isinstance(value, np.ndarray):
        return np.floor(value + 0.5).astype(np.int64)
    return int(math.floor(value + 0.5))


def truncate(value: Number) -> Number:
    """Truncate toward zero, like an integer cast."""
    if isinstance(value, np.ndarray):
        return np.trunc(value).astype(np.int64)
    return int(value)


def clamp_channel(value: Number) -> Number:
    """Clamp channel value(s) into [0, 255]."""
    return np.clip(value, ChannelConstants.MIN_VALUE, ChannelConstants.MAX_VALUE)


def to_channel_array(value: Number) -> np.ndarray:
    """Clamp and convert channel values to uint8."""
    return np.asarray(clamp_channel(value)).astype(np.uint8)
