"""
Face Renderer - Orders the per-layer draw routines for each frame
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Protocol, Sequence

from PIL import Image

from ..core.expression_service import Expression
from ..core.logging_service import LoggingService, get_logger
from . import drawing
from .layout import Layout, LayoutCache, Rect
from .render_mode import Layer, RenderParameters
from .styles import PaintStyles
from .surface import PillowSurface, Surface


class ComplicationSlot(Protocol):
    """Third-party data slot; only its highlight layer is drawn here."""

    enabled: bool

    def render_highlight_layer(self, surface: Surface, zoned_time: datetime,
                               params: RenderParameters) -> None: ...


@dataclass
class SharedAssets:
    """Per-surface shared resources. The face needs none."""

    def on_destroy(self) -> None:
        pass


class FaceRenderer:
    """
    Draws the watch face for one frame.

    Layout is computed lazily on the first frame and whenever the surface
    size changes. Paint styles are resolved before construction.
    """

    def __init__(
        self,
        styles: PaintStyles,
        head_radius: float,
        icon_width: float,
        complication_slots: Sequence[ComplicationSlot] = (),
        logger: Optional[LoggingService] = None,
    ):
        """
        Args:
            styles: Resolved paint styles
            head_radius: Face outline radius in pixels
            icon_width: Decorative icon width in pixels
            complication_slots: Slots whose highlight layer is drawn on request
            logger: Logging service, the global one by default
        """
        self._styles = styles
        self._logger = logger or get_logger()
        self._layout_cache = LayoutCache(head_radius, icon_width, self._logger)
        self._complication_slots = tuple(complication_slots)

    def create_shared_assets(self) -> SharedAssets:
        return SharedAssets()

    def layout_for(self, bounds: Rect) -> Layout:
        return self._layout_cache.get(int(bounds.width), int(bounds.height))

    def render(
        self,
        surface: Surface,
        bounds: Rect,
        zoned_time: datetime,
        params: RenderParameters,
        expression: Expression = Expression.IDLE,
        shared_assets: Optional[SharedAssets] = None,
    ) -> None:
        """
        Draw one frame.

        Args:
            surface: Target surface, borrowed for this call only
            bounds: Drawable area in pixels
            zoned_time: Timezone-aware frame time
            params: Draw mode and active layers
            expression: Expression for interactive frames
            shared_assets: Assets from create_shared_assets
        """
        layout = self.layout_for(bounds)
        styles = self._styles

        drawing.draw_background(surface, styles)

        if params.has_layer(Layer.COMPLICATIONS_OVERLAY):
            self._draw_clock(surface, layout, zoned_time, params)

        if params.is_interactive and params.has_layer(Layer.BASE):
            self._draw_outer_elements(surface, layout, expression)

    def _draw_clock(self, surface: Surface, layout: Layout, zoned_time: datetime,
                    params: RenderParameters) -> None:
        ambient = params.is_ambient
        drawing.draw_clock_text(surface, layout, self._styles, zoned_time, ambient)

        if ambient:
            # Low-power frames always show the idle face
            drawing.draw_face(surface, layout, self._styles, Expression.IDLE)
            drawing.draw_eyes(surface, layout, self._styles, Expression.IDLE)
            drawing.draw_additional_text(surface, layout, self._styles)
            drawing.draw_ambient_text(surface, layout, self._styles)

    def _draw_outer_elements(self, surface: Surface, layout: Layout,
                             expression: Expression) -> None:
        drawing.draw_label_block(surface, layout, self._styles)
        drawing.draw_additional_text(surface, layout, self._styles)
        drawing.draw_face(surface, layout, self._styles, expression)
        drawing.draw_eyes(surface, layout, self._styles, expression)

    def render_highlight_layer(
        self,
        surface: Surface,
        bounds: Rect,
        zoned_time: datetime,
        params: RenderParameters,
        shared_assets: Optional[SharedAssets] = None,
    ) -> None:
        """
        Draw the selection overlay: background tint, then each enabled
        complication slot's own highlight.

        Raises:
            ValueError: If params carries no highlight layer
        """
        if params.highlight_layer is None:
            raise ValueError("render_highlight_layer requires params.highlight_layer")

        surface.clear(params.highlight_layer.background_tint)

        for slot in self._complication_slots:
            if slot.enabled:
                slot.render_highlight_layer(surface, zoned_time, params)

    @property
    def styles(self) -> PaintStyles:
        return self._styles


def render_image(
    renderer: FaceRenderer,
    width: int,
    height: int,
    zoned_time: datetime,
    params: RenderParameters,
    expression: Expression = Expression.IDLE,
) -> Image.Image:
    """
    Render one frame into a new RGB image.

    Returns:
        PIL image of size (width, height)
    """
    surface = PillowSurface.new(width, height)
    renderer.render(surface, Rect(0, 0, width, height), zoned_time, params, expression)
    return surface.image
