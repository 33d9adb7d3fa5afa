"""Interactive pygame window around a SketchEngine."""

import logging
from typing import Optional, Tuple

import pygame

from rendering.compositor import PygameCompositor
from sketchbook.engine import SketchEngine

logger = logging.getLogger(__name__)


class SketchWindow:
    """Shows a sketch in a window and forwards input to it.

    Keys: R toggles recording, SPACE pauses, ESC quits. Other keys and
    mouse clicks are forwarded to the sketch, with mouse positions mapped
    back to canvas coordinates when the window is scaled down.

    Attributes:
        engine: The engine being displayed
        compositor: Frame buffer the engine draws into
        scale: Window size relative to the canvas
        running: False once the window has been closed
    """

    def __init__(self, engine: SketchEngine, compositor: PygameCompositor, scale: float = 1.0) -> None:
        self.engine = engine
        self.compositor = compositor
        self.scale = scale
        self.screen: Optional[pygame.Surface] = None
        self.clock: pygame.time.Clock = pygame.time.Clock()
        self.running = True

    @property
    def window_size(self) -> Tuple[int, int]:
        width, height = self.compositor.size
        return (max(1, int(width * self.scale)), max(1, int(height * self.scale)))

    def setup(self) -> None:
        self.screen = pygame.display.set_mode(self.window_size)
        pygame.display.set_caption(self.engine.sketch.title)

    def handle_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN:
                self.handle_key(event.key, event.unicode)
            elif event.type == pygame.MOUSEBUTTONDOWN:
                x, y = event.pos
                self.engine.mouse_pressed(x / self.scale, y / self.scale)

    def handle_key(self, key: int, text: str = "") -> None:
        if key == pygame.K_ESCAPE:
            self.running = False
        elif key == pygame.K_r:
            recording = self.engine.toggle_recording("key")
            logger.info("Recording %s", "on" if recording else "off")
        elif key == pygame.K_SPACE:
            self.engine.paused = not self.engine.paused
            logger.info("Paused" if self.engine.paused else "Resumed")
        elif text:
            self.engine.key_pressed(text)

    def render(self) -> None:
        if self.screen is None:
            return
        frame = self.compositor.surface
        if self.scale != 1.0:
            frame = pygame.transform.smoothscale(frame, self.window_size)
        self.screen.blit(frame, (0, 0))
        pygame.display.flip()

    def run(self) -> None:
        """Main loop. A halted engine keeps its last frame on screen until closed."""
        self.setup()
        fps = self.engine.sketch.config.display.frame_rate
        while self.running:
            self.handle_events()
            if self.engine.running:
                self.engine.tick()
            self.render()
            self.clock.tick(fps)
