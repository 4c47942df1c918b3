"""
Common data structures shared by the core operations and the API.

This module contains:
- Rectangle: crop/trim regions in buffer coordinates
- Offset: overlay displacement on a canvas
- Color: RGBA color with 8-bit channels
"""

from typing import Any, Dict, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field


class Rectangle(BaseModel):
    """
    Rectangular region in buffer coordinates.

    Any integers are accepted here; whether the region fits an image is
    checked by the operation that uses it (see fits_within).
    """

    model_config = ConfigDict(frozen=True)

    x: int = Field(..., description="X coordinate of the top-left corner")
    y: int = Field(..., description="Y coordinate of the top-left corner")
    width: int = Field(..., description="Width")
    height: int = Field(..., description="Height")

    def to_dict(self) -> Dict[str, int]:
        """Convert to dictionary."""
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Rectangle":
        """Create Rectangle from dictionary."""
        return cls(
            x=int(data.get("x", 0)),
            y=int(data.get("y", 0)),
            width=int(data.get("width", 0)),
            height=int(data.get("height", 0)),
        )

    @classmethod
    def full(cls, width: int, height: int) -> "Rectangle":
        """Rectangle covering a whole width x height image."""
        return cls(x=0, y=0, width=width, height=height)

    @classmethod
    def coerce(cls, value: Union["Rectangle", Dict[str, Any], Sequence[int]]) -> "Rectangle":
        """Accept a Rectangle, a dict or an (x, y, width, height) sequence."""
        if isinstance(value, Rectangle):
            return value
        if isinstance(value, dict):
            return cls.from_dict(value)
        x, y, width, height = value
        return cls(x=x, y=y, width=width, height=height)

    @property
    def x2(self) -> int:
        """Get right edge coordinate (exclusive)."""
        return self.x + self.width

    @property
    def y2(self) -> int:
        """Get bottom edge coordinate (exclusive)."""
        return self.y + self.height

    def fits_within(self, image_width: int, image_height: int) -> bool:
        """
        Check that the region lies inside an image.

        Args:
            image_width: Image width
            image_height: Image height

        Returns:
            True if the region is non-negative and does not exceed the bounds
        """
        if self.x < 0 or self.y < 0 or self.width < 0 or self.height < 0:
            return False

        return self.x2 <= image_width and self.y2 <= image_height


class Offset(BaseModel):
    """2D integer displacement; may be negative or exceed the canvas."""

    model_config = ConfigDict(frozen=True)

    x: int = Field(0, description="Horizontal displacement")
    y: int = Field(0, description="Vertical displacement")

    @classmethod
    def coerce(cls, value: Optional[Union["Offset", Dict[str, Any], Sequence[int]]]) -> "Offset":
        """Accept None (no offset), an Offset, a dict or an (x, y) sequence."""
        if value is None:
            return cls()
        if isinstance(value, Offset):
            return value
        if isinstance(value, dict):
            return cls(x=int(value.get("x", 0)), y=int(value.get("y", 0)))
        x, y = value
        return cls(x=x, y=y)


class Color(BaseModel):
    """RGBA color, each channel in [0, 255]."""

    model_config = ConfigDict(frozen=True)

    r: int = Field(..., ge=0, le=255, description="Red")
    g: int = Field(..., ge=0, le=255, description="Green")
    b: int = Field(..., ge=0, le=255, description="Blue")
    a: int = Field(255, ge=0, le=255, description="Alpha (255 = opaque)")

    @classmethod
    def coerce(cls, value: Union["Color", Dict[str, Any], Sequence[int]]) -> "Color":
        """Accept a Color, a dict or an (r, g, b[, a]) sequence."""
        if isinstance(value, Color):
            return value
        if isinstance(value, dict):
            return cls(**value)
        channels = tuple(value)
        if len(channels) not in (3, 4):
            raise ValueError(f"Color needs 3 or 4 channels, got {len(channels)}")
        return cls(**dict(zip("rgba", channels)))

    @property
    def rgb(self) -> Tuple[int, int, int]:
        """Get (r, g, b) tuple."""
        return (self.r, self.g, self.b)

    def as_tuple(self) -> Tuple[int, int, int, int]:
        """Get (r, g, b, a) tuple."""
        return (self.r, self.g, self.b, self.a)
