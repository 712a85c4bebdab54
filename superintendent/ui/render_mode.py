"""
Render Mode - Per-frame draw mode and active layer set supplied by the host
"""
from dataclasses import dataclass
from enum import Enum, Flag
from typing import Optional, Tuple


class DrawMode(Enum):
    INTERACTIVE = "interactive"
    LOW_BATTERY_INTERACTIVE = "low_battery_interactive"
    MUTE = "mute"
    AMBIENT = "ambient"


class Layer(Flag):
    """Visual groups the host may enable or disable per frame."""
    NONE = 0
    BASE = 1
    COMPLICATIONS = 2
    COMPLICATIONS_OVERLAY = 4
    ALL = 7


@dataclass(frozen=True)
class HighlightLayer:
    """Parameters for drawing the complication selection overlay."""
    background_tint: Tuple[int, int, int, int]
    highlighted_slot: Optional[int] = None


@dataclass(frozen=True)
class RenderParameters:
    """
    Mode and layers for one frame. The renderer only reads these.
    """
    draw_mode: DrawMode = DrawMode.INTERACTIVE
    layers: Layer = Layer.ALL
    highlight_layer: Optional[HighlightLayer] = None

    def has_layer(self, layer: Layer) -> bool:
        return (self.layers & layer) == layer and layer != Layer.NONE

    @property
    def is_ambient(self) -> bool:
        return self.draw_mode is DrawMode.AMBIENT

    @property
    def is_interactive(self) -> bool:
        return self.draw_mode is DrawMode.INTERACTIVE


INTERACTIVE = RenderParameters(DrawMode.INTERACTIVE, Layer.ALL)
AMBIENT = RenderParameters(DrawMode.AMBIENT, Layer.ALL)
