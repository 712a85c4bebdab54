"""
Health Service - Render loop heartbeat and frame timing
Detects when the render loop stops producing frames
"""
import time
from collections import deque
from typing import Callable, Deque, Optional
from threading import Thread, Event

from .logging_service import LoggingService, get_logger


FRAME_WINDOW = 60


class HealthService:
    """
    Monitor render loop responsiveness via heartbeats.
    """

    def __init__(self, heartbeat_interval: float = 5, timeout: float = 15,
                 logger: Optional[LoggingService] = None):
        """
        Initialize health service.

        Args:
            heartbeat_interval: How often the monitor thread checks (seconds)
            timeout: Time without a heartbeat before the loop counts as frozen (seconds)
            logger: Logging service, the global one by default
        """
        self._heartbeat_interval = heartbeat_interval
        self._timeout = timeout
        self._logger = logger or get_logger()

        self._last_heartbeat: float = time.monotonic()
        self._is_healthy: bool = True
        self._monitoring: bool = False
        self._monitor_thread: Optional[Thread] = None
        self._stop_event: Event = Event()

        self._frame_times: Deque[float] = deque(maxlen=FRAME_WINDOW)

        self._on_freeze: Optional[Callable[[], None]] = None
        self._on_recover: Optional[Callable[[], None]] = None

    def heartbeat(self) -> None:
        """
        Record a heartbeat; call once per rendered frame.
        """
        was_frozen = not self._is_healthy

        self._last_heartbeat = time.monotonic()
        self._is_healthy = True

        if was_frozen and self._on_recover:
            try:
                self._on_recover()
            except Exception as e:
                self._logger.error(f"Health recovery callback error: {e}", exc_info=True)

    def record_frame(self, elapsed_ms: float) -> None:
        """Add a frame duration to the rolling window"""
        self._frame_times.append(elapsed_ms)

    def average_frame_ms(self) -> float:
        """Mean frame duration over the rolling window, 0.0 when empty"""
        if not self._frame_times:
            return 0.0
        return sum(self._frame_times) / len(self._frame_times)

    def start_monitoring(self) -> None:
        """Start background health monitoring thread"""
        if self._monitoring:
            return

        self._monitoring = True
        self._stop_event.clear()
        self._monitor_thread = Thread(target=self._monitor_loop, daemon=True)
        self._monitor_thread.start()

    def stop_monitoring(self) -> None:
        if not self._monitoring:
            return

        self._monitoring = False
        self._stop_event.set()

        if self._monitor_thread:
            self._monitor_thread.join(timeout=2)
            self._monitor_thread = None

    def _monitor_loop(self) -> None:
        while self._monitoring and not self._stop_event.is_set():
            self.check_health()
            self._stop_event.wait(self._heartbeat_interval)

    def check_health(self) -> bool:
        """
        Re-evaluate health and fire the freeze callback on a healthy to
        frozen transition.

        Returns:
            True if a heartbeat arrived within the timeout
        """
        was_healthy = self._is_healthy
        self._is_healthy = self.is_healthy()

        if was_healthy and not self._is_healthy and self._on_freeze:
            try:
                self._on_freeze()
            except Exception as e:
                self._logger.error(f"Health freeze callback error: {e}", exc_info=True)

        return self._is_healthy

    def is_healthy(self) -> bool:
        return time.monotonic() - self._last_heartbeat < self._timeout

    def get_status(self) -> dict:
        """
        Get detailed health status.

        Returns:
            Dictionary with health and frame timing metrics
        """
        elapsed = time.monotonic() - self._last_heartbeat

        return {
            'healthy': self.is_healthy(),
            'seconds_since_heartbeat': round(elapsed, 1),
            'timeout': self._timeout,
            'monitoring': self._monitoring,
            'avg_frame_ms': round(self.average_frame_ms(), 1),
        }

    def set_freeze_callback(self, callback: Callable[[], None]) -> None:
        self._on_freeze = callback

    def set_recover_callback(self, callback: Callable[[], None]) -> None:
        self._on_recover = callback

    @property
    def timeout(self) -> float:
        return self._timeout
