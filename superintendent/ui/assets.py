"""
Assets - Font and icon resolution, done once before the renderer is built
"""
import os
from pathlib import Path
from typing import Optional

from PIL import Image, ImageDraw, ImageFont

from ..core.logging_service import LoggingService, get_logger
from .styles import PaintStyles
from .theme import Theme


FONT_SEARCH_PATHS = [
    '/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf',
    '/usr/share/fonts/truetype/liberation/LiberationSans-Bold.ttf',
    '/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf',
]

EMBLEM_SIZE = (125, 176)


class AssetLoader:
    """
    Resolves fonts and the decorative icon into Pillow objects.
    """

    def __init__(self, font_path: str = '', icon_path: str = '',
                 logger: Optional[LoggingService] = None):
        """
        Args:
            font_path: TrueType font file, system fonts are searched when empty
            icon_path: Icon image with alpha, a built-in emblem is used when empty

        Raises:
            FileNotFoundError: If an explicitly configured file does not exist
        """
        self._logger = logger or get_logger()
        self._font_file = self._resolve_font(font_path)
        self._icon_path = icon_path
        if icon_path and not Path(icon_path).exists():
            raise FileNotFoundError(f"Icon not found: {icon_path}")

    def _resolve_font(self, font_path: str) -> Optional[str]:
        if font_path:
            if not os.path.exists(font_path):
                raise FileNotFoundError(f"Font not found: {font_path}")
            return font_path

        for path in FONT_SEARCH_PATHS:
            if os.path.exists(path):
                self._logger.info(f"Using font: {path}")
                return path

        self._logger.warning("No TrueType font found, using Pillow default font")
        return None

    def font(self, size: int) -> ImageFont.FreeTypeFont:
        if self._font_file:
            return ImageFont.truetype(self._font_file, size)
        return ImageFont.load_default(size)

    def icon(self) -> Image.Image:
        if self._icon_path:
            return Image.open(self._icon_path).convert('RGBA')
        return build_emblem()

    def paint_styles(self, clock_size: int = Theme.FONT_SIZE_CLOCK,
                     label_size: int = Theme.FONT_SIZE_LABEL,
                     additional_size: int = Theme.FONT_SIZE_ADDITIONAL,
                     ambient_size: int = Theme.FONT_SIZE_AMBIENT) -> PaintStyles:
        """
        Load every font size and the icon into PaintStyles.

        Returns:
            PaintStyles ready for FaceRenderer
        """
        return PaintStyles.from_theme(
            clock_font=self.font(clock_size),
            label_font=self.font(label_size),
            additional_font=self.font(additional_size),
            ambient_font=self.font(ambient_size),
            icon=self.icon(),
        )


def build_emblem(size=EMBLEM_SIZE) -> Image.Image:
    """
    Procedural stand-in icon: a shield with a chevron cut out, drawn as
    an alpha mask on a transparent image.
    """
    width, height = size
    image = Image.new('RGBA', size, (0, 0, 0, 0))
    draw = ImageDraw.Draw(image)

    shield = [
        (0, 0), (width - 1, 0), (width - 1, height * 0.62),
        (width / 2, height - 1), (0, height * 0.62),
    ]
    draw.polygon(shield, fill=(255, 255, 255, 255))

    chevron = [
        (width * 0.2, height * 0.25), (width / 2, height * 0.5),
        (width * 0.8, height * 0.25), (width * 0.8, height * 0.4),
        (width / 2, height * 0.65), (width * 0.2, height * 0.4),
    ]
    draw.polygon(chevron, fill=(0, 0, 0, 0))
    return image
