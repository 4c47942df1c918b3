"""
Utility modules for core functionality.

Modules:
- arithmetic: Rounding and channel clamping helpers shared by the operations
- decorators: Timing helpers
"""

from .arithmetic import clamp_channel, round_half_up, to_channel_array, truncate
from .decorators import timer

__all__ = [
    "clamp_channel",
    "round_half_up",
    "to_channel_array",
    "truncate",
    "timer",
]
