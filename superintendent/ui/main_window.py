"""
Main Window - pygame host loop for the watch face
"""
import time
from typing import Optional

import pygame

from ..core.clock_service import ClockService
from ..core.expression_service import ExpressionService
from ..core.health_service import HealthService
from ..core.logging_service import LoggingService
from .render_mode import AMBIENT, INTERACTIVE, RenderParameters
from .renderer import FaceRenderer, render_image


class MainWindow:
    """
    pygame window that ticks the renderer and presents each frame.

    Keys: Esc/q quit, a toggles ambient, e steps the expression,
    c toggles expression auto-cycling.
    """

    def __init__(
        self,
        renderer: FaceRenderer,
        clock_service: ClockService,
        expression_service: ExpressionService,
        health_service: HealthService,
        logger: LoggingService,
        width: int = 454,
        height: int = 454,
        fullscreen: bool = False,
        frame_period_ms: int = 16,
        ambient_period_ms: int = 1000,
        start_ambient: bool = False,
    ):
        """
        Initialize main window.

        Args:
            renderer: Face renderer
            clock_service: Source of frame timestamps
            expression_service: Source of the expression per frame
            health_service: Heartbeat and frame timing monitor
            logger: Logging service
            width: Window width
            height: Window height
            fullscreen: Whether to run fullscreen
            frame_period_ms: Interactive redraw period in milliseconds
            ambient_period_ms: Ambient redraw period in milliseconds
            start_ambient: Start in ambient mode
        """
        self._renderer = renderer
        self._clock = clock_service
        self._expressions = expression_service
        self._health = health_service
        self._logger = logger

        self._width = width
        self._height = height
        self._fullscreen = fullscreen
        self._frame_period_ms = frame_period_ms
        self._ambient_period_ms = ambient_period_ms

        self._params: RenderParameters = AMBIENT if start_ambient else INTERACTIVE
        self._screen: Optional[pygame.Surface] = None
        self._running = False
        self._frames = 0
        self._next_frame = 0.0

    def initialize(self) -> None:
        """Initialize pygame and open the window"""
        self._logger.info("Initializing pygame window")
        pygame.init()

        flags = pygame.FULLSCREEN if self._fullscreen else 0
        self._screen = pygame.display.set_mode((self._width, self._height), flags)
        pygame.display.set_caption("Superintendent")
        if self._fullscreen:
            pygame.mouse.set_visible(False)

        self._logger.info(f"Window initialized: {self._width}x{self._height}")

    def _period_ms(self) -> int:
        return self._ambient_period_ms if self._params.is_ambient else self._frame_period_ms

    def _handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.QUIT:
            self._running = False
        elif event.type == pygame.KEYDOWN:
            if event.key in (pygame.K_ESCAPE, pygame.K_q):
                self._running = False
            elif event.key == pygame.K_a:
                self.toggle_ambient()
            elif event.key == pygame.K_e:
                expression = self._expressions.next()
                self._logger.info(f"Expression set to {expression.value}")
            elif event.key == pygame.K_c:
                self._expressions.auto_cycle = not self._expressions.auto_cycle
                self._logger.info(f"Expression auto-cycle {'on' if self._expressions.auto_cycle else 'off'}")

    def toggle_ambient(self) -> None:
        self._params = INTERACTIVE if self._params.is_ambient else AMBIENT
        self._logger.info(f"Draw mode: {self._params.draw_mode.value}")
        self._next_frame = 0.0

    def _render_frame(self) -> None:
        """Render and present one frame"""
        t_start = time.perf_counter()

        now = self._clock.get_current_time()
        image = render_image(self._renderer, self._width, self._height, now,
                             self._params, self._expressions.current(now))

        frame = pygame.image.frombuffer(image.tobytes(), image.size, 'RGB')
        self._screen.blit(frame, (0, 0))
        pygame.display.flip()

        self._health.record_frame((time.perf_counter() - t_start) * 1000)
        self._health.heartbeat()

        self._frames += 1
        if self._frames % 300 == 0:
            self._logger.debug(f"Render timing: avg={self._health.average_frame_ms():.1f}ms")

    def start(self) -> None:
        """Run the event loop until quit"""
        if self._screen is None:
            self.initialize()

        self._logger.info("Starting render loop")
        self._running = True
        self._health.start_monitoring()

        pygame_clock = pygame.time.Clock()
        self._next_frame = 0.0

        try:
            while self._running:
                for event in pygame.event.get():
                    self._handle_event(event)

                now = time.monotonic()
                if now >= self._next_frame:
                    try:
                        self._render_frame()
                    except Exception as e:
                        self._logger.error(f"Frame render error: {e}", exc_info=True)
                    self._next_frame = now + self._period_ms() / 1000

                pygame_clock.tick(60)
        finally:
            self.stop()

    def stop(self) -> None:
        """Stop the loop and close the window"""
        if self._screen is None:
            return
        self._logger.info("Stopping render loop")
        self._running = False
        self._health.stop_monitoring()
        pygame.quit()
        self._screen = None

    def is_running(self) -> bool:
        return self._running
