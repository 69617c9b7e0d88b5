"""Design-space scaling — maps viewport pixels to the 1920×1080 canvas.

Scenes are authored on a fixed 1920×1080 canvas which is uniformly scaled
to cover the viewport and centred.  Hotspot positions are stored as
percentages of that canvas so they survive any window size.
"""

import math
from dataclasses import dataclass
from typing import Tuple

DESIGN_WIDTH = 1920
DESIGN_HEIGHT = 1080
DESIGN_ASPECT = DESIGN_WIDTH / DESIGN_HEIGHT


def cover_scale(viewport_w: float, viewport_h: float) -> float:
    """Uniform scale factor that makes the design canvas cover the viewport.

    Wider-than-16:9 viewports are matched on width, taller ones on height,
    so the canvas always fills the window (overflow is cropped).
    """
    if viewport_w <= 0 or viewport_h <= 0:
        return 1.0
    if viewport_w / viewport_h > DESIGN_ASPECT:
        return viewport_w / DESIGN_WIDTH
    return viewport_h / DESIGN_HEIGHT


def _round2(value: float) -> float:
    # half-up, so 12.345 -> 12.35 regardless of float banking
    return math.floor(value * 100 + 0.5) / 100


@dataclass(frozen=True)
class ScaleTransform:
    """Viewport ↔ design-space mapping for one viewport size."""
    viewport_w: float
    viewport_h: float
    scale: float = 0.0

    def __post_init__(self) -> None:
        if self.scale <= 0:
            object.__setattr__(self, "scale", cover_scale(self.viewport_w, self.viewport_h))

    @property
    def canvas_size(self) -> Tuple[float, float]:
        return DESIGN_WIDTH * self.scale, DESIGN_HEIGHT * self.scale

    @property
    def origin(self) -> Tuple[float, float]:
        """Top-left of the scaled canvas in viewport pixels (may be negative)."""
        cw, ch = self.canvas_size
        return (self.viewport_w - cw) / 2, (self.viewport_h - ch) / 2

    def to_design_percent(
        self,
        client_x: float,
        client_y: float,
        container_left: float = 0.0,
        container_top: float = 0.0,
    ) -> Tuple[float, float]:
        """Convert a pointer position to ``(left%, top%)`` of design space.

        Rounded to two decimals.  Non-finite input maps to ``(0, 0)``.
        """
        if not (math.isfinite(client_x) and math.isfinite(client_y)):
            return 0.0, 0.0
        design_x = (client_x - container_left) / self.scale
        design_y = (client_y - container_top) / self.scale
        left = _round2(design_x / DESIGN_WIDTH * 100)
        top = _round2(design_y / DESIGN_HEIGHT * 100)
        return left, top

    def to_viewport(self, left_pct: float, top_pct: float) -> Tuple[float, float]:
        """Map a design-space percentage to viewport pixels on the scaled canvas."""
        ox, oy = self.origin
        x = ox + left_pct / 100 * DESIGN_WIDTH * self.scale
        y = oy + top_pct / 100 * DESIGN_HEIGHT * self.scale
        return x, y
