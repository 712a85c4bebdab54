"""
Theme - Colors, font sizes and fixed texts of the watch face
"""
from typing import Tuple, Union


Color = Union[Tuple[int, int, int], Tuple[int, int, int, int]]


class Theme:
    """
    Dark theme configuration for the watch face.
    """

    # Color Palette
    BACKGROUND = '#000000'
    FG_PRIMARY = '#ffffff'        # Clock, labels, outline, eyes, icon tint
    FG_SECONDARY = '#808080'      # Dimmed label line
    FACE_NORMAL = '#f5a623'       # Head fill for every expression but angry
    ALERT = '#cc0000'             # Angry head fill, ambient warning text

    # Default font sizes (pixels)
    FONT_SIZE_CLOCK = 56
    FONT_SIZE_LABEL = 20
    FONT_SIZE_ADDITIONAL = 16
    FONT_SIZE_AMBIENT = 20

    # Fixed texts
    LABEL_LINES = ('>NAVIGATION', '>SYSTEM', '>TIME', '>INTEL')
    DIMMED_LABEL = '>TIME'
    ICON_ANCHOR_LABEL = '>NAVIGATION'
    ADDITIONAL_TEXT = '>>PLEASE REMAIN CALM<<'
    AMBIENT_TEXT = '>>ACCESS DENIED<<'

    @staticmethod
    def rgb(hex_color: str) -> Tuple[int, int, int]:
        """
        Convert hex color to RGB tuple.

        Args:
            hex_color: Color like '#ff8800' or 'ff8800'

        Returns:
            Tuple of (r, g, b)
        """
        hex_color = hex_color.lstrip('#')
        if len(hex_color) != 6:
            raise ValueError(f"Expected a 6 digit hex color, got {hex_color!r}")
        return tuple(int(hex_color[i:i + 2], 16) for i in (0, 2, 4))
