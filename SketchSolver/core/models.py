"""Core data model.

Plain dataclasses shared by the surface, the extractor, the recognition
client and the placement manager. Only the snapshot carries pixel data.
"""
from __future__ import annotations
from dataclasses import dataclass, field
import numpy as np


# ---- Geometry ----
@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class BoundingBox:
    """Inclusive pixel rectangle (min_x, min_y, max_x, max_y)."""
    min_x: int
    min_y: int
    max_x: int
    max_y: int

    def __post_init__(self) -> None:
        if self.min_x > self.max_x or self.min_y > self.max_y:
            raise ValueError(f"Degenerate bounding box: {self}")

    @property
    def width(self) -> int:
        return self.max_x - self.min_x + 1

    @property
    def height(self) -> int:
        return self.max_y - self.min_y + 1

    def center(self) -> Point:
        return Point((self.min_x + self.max_x) / 2, (self.min_y + self.max_y) / 2)


# ---- Pixel capture ----
@dataclass(frozen=True, eq=False)
class Snapshot:
    """Immutable RGBA capture of the drawing surface.

    `pixels` has shape (height, width, 4) and is marked read-only.
    Snapshots compare by identity; compare `pixels` explicitly for content.
    """
    width: int
    height: int
    pixels: np.ndarray = field(repr=False)

    @classmethod
    def from_rgba(cls, pixels: np.ndarray) -> "Snapshot":
        arr = np.array(pixels, dtype=np.uint8, copy=True)
        if arr.ndim != 3 or arr.shape[2] != 4:
            raise ValueError(f"Expected (height, width, 4) RGBA array, got shape {arr.shape}")
        arr.setflags(write=False)
        return cls(width=arr.shape[1], height=arr.shape[0], pixels=arr)

    @classmethod
    def blank(cls, width: int, height: int) -> "Snapshot":
        return cls.from_rgba(np.zeros((height, width, 4), dtype=np.uint8))

    @property
    def alpha(self) -> np.ndarray:
        return self.pixels[:, :, 3]


# ---- Recognition ----
@dataclass(frozen=True)
class RecognitionResult:
    expression: str
    value: str
    is_assignment: bool = False

    def display_text(self) -> str:
        return f"{self.expression} = {self.value}"


@dataclass
class PlacedResult:
    """A result shown on the canvas. Only `position` changes after creation."""
    text: str
    position: Point

    @property
    def latex(self) -> str:
        return rf"\(\LARGE{{{self.text}}}\)"

    @classmethod
    def from_result(cls, result: RecognitionResult, position: Point) -> "PlacedResult":
        return cls(text=result.display_text(), position=position)
