"""
Clock Service - Timezone-aware time source and clock text formatting
"""
import logging
from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


def format_clock_text(moment: datetime, ambient: bool) -> str:
    """
    Format the digital clock text.

    Hour is unpadded 0-23; minutes and seconds are always two digits.
    Ambient frames drop the seconds field.

    Args:
        moment: Time to format
        ambient: Whether the frame is a low-power frame

    Returns:
        ``H:MM`` when ambient, otherwise ``H:MM:SS``
    """
    if ambient:
        return f"{moment.hour}:{moment.minute:02d}"
    return f"{moment.hour}:{moment.minute:02d}:{moment.second:02d}"


class ClockService:
    """
    Supplies the timezone-aware timestamps passed to the renderer each tick.
    """

    def __init__(self, timezone: str = 'UTC'):
        """
        Args:
            timezone: IANA timezone string (e.g., 'Europe/London')
        """
        self._timezone = timezone
        self._tz_obj: Optional[ZoneInfo] = None
        self._load_timezone()

    def _load_timezone(self) -> None:
        """Load timezone object, fallback to UTC on error"""
        try:
            self._tz_obj = ZoneInfo(self._timezone)
        except (ZoneInfoNotFoundError, ValueError) as e:
            logging.warning(f"Invalid timezone '{self._timezone}', using UTC: {e}")
            self._timezone = 'UTC'
            self._tz_obj = ZoneInfo('UTC')

    def set_timezone(self, timezone: str) -> bool:
        """
        Change timezone dynamically.

        Returns:
            True if the timezone was accepted, False if UTC was used instead
        """
        self._timezone = timezone
        self._load_timezone()
        return self._timezone == timezone

    def get_current_time(self) -> datetime:
        """Current time in the configured timezone"""
        return datetime.now(self._tz_obj)

    def format_time(self, ambient: bool = False) -> str:
        return format_clock_text(self.get_current_time(), ambient)

    @property
    def timezone(self) -> str:
        return self._timezone
