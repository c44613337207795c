"""
Desktop window for Bee Chase using pygame.

Plays the collaborator roles around the game core: it normalizes raw
keyboard/mouse input into start and jump intents, reports the viewport
height, drives the clock with real frame time and presents snapshots.
"""

import pygame
import asyncio
import logging

import numpy as np

from ..config.settings import SimulatorSettings
from ..core.events import EventBus, EventType, Event, jump_event, start_event
from ..core.state import GameState
from ..game.machine import GameStateMachine
from ..game.snapshot import GameSnapshot
from ..graphics.renderer import SceneRenderer

logger = logging.getLogger(__name__)

TEXT_DARK = (31, 41, 55)
TEXT_MUTED = (75, 85, 99)
TEXT_LIGHT = (255, 255, 255)
RED = (220, 38, 38)
GOLD = (250, 204, 21)
PANEL = (255, 255, 255)


class SimulatorWindow:
    """
    Main game window.

    Keyboard Mapping:
        SPACE / UP ARROW / mouse click: Jump while playing, start otherwise
        D: Toggle debug overlay
        L: Toggle log viewer
        ESC / Q: Exit
    """

    def __init__(
        self,
        game: GameStateMachine,
        config: SimulatorSettings | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        self.config = config or SimulatorSettings()
        self.game = game
        self.event_bus = event_bus or EventBus()
        game.attach(self.event_bus)

        # Pygame setup
        self._screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._running = False
        self._show_debug = False

        self.renderer = SceneRenderer(self.config.width, self.config.height)

        # Fonts
        self._title_font: pygame.font.Font | None = None
        self._font: pygame.font.Font | None = None
        self._small_font: pygame.font.Font | None = None

        # Log viewer
        self._show_log = False
        self._log_buffer: list[str] = []
        self._max_log_lines = 20

        self._setup_log_capture()
        self.event_bus.subscribe(EventType.PERSISTENCE_ERROR, self._on_persistence_error)

        logger.info("SimulatorWindow created")

    def _setup_log_capture(self) -> None:
        """Setup log capturing for the log viewer."""
        class SimulatorLogHandler(logging.Handler):
            def __init__(self, window: 'SimulatorWindow'):
                super().__init__()
                self.window = window

            def emit(self, record):
                msg = self.format(record)
                self.window._log_buffer.append(msg)
                # Keep buffer size limited
                if len(self.window._log_buffer) > self.window._max_log_lines * 2:
                    self.window._log_buffer = self.window._log_buffer[-self.window._max_log_lines:]

        self._log_handler = SimulatorLogHandler(self)
        self._log_handler.setFormatter(logging.Formatter('%(levelname).1s %(name)s: %(message)s'))
        logging.getLogger().addHandler(self._log_handler)

    def _init_pygame(self) -> None:
        """Initialize pygame and create window."""
        pygame.init()
        pygame.display.set_caption(self.config.title)

        flags = pygame.DOUBLEBUF
        if self.config.resizable:
            flags |= pygame.RESIZABLE

        self._screen = pygame.display.set_mode(
            (self.config.width, self.config.height),
            flags
        )
        self._clock = pygame.time.Clock()

        pygame.font.init()
        self._title_font = pygame.font.SysFont(None, 56)
        self._font = pygame.font.SysFont(None, 32)
        self._small_font = pygame.font.SysFont(None, 22)

        self.game.set_viewport_height(self.config.height)
        logger.info(f"Pygame initialized: {self.config.width}x{self.config.height}")

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.KEYDOWN:
                self._handle_keydown(event)

            elif event.type == pygame.MOUSEBUTTONDOWN:
                # Touch stand-in
                self._primary_press("touch")

            elif event.type == pygame.VIDEORESIZE:
                self._handle_resize(event.w, event.h)

    def _handle_keydown(self, event: pygame.event.Event) -> None:
        """Handle key press."""
        key = event.key

        if key == pygame.K_ESCAPE or key == pygame.K_q:
            self._running = False
        elif key == pygame.K_d:
            # D for Debug
            self._show_debug = not self._show_debug
        elif key == pygame.K_l:
            # L for Log viewer
            self._show_log = not self._show_log
        elif key in (pygame.K_SPACE, pygame.K_UP):
            self._primary_press("keyboard")

    def _primary_press(self, source: str) -> None:
        """One button does both: jump while playing, start otherwise.

        Intents are queued and applied at the top of the next frame.
        """
        if self.game.is_playing:
            self.event_bus.queue_event(jump_event(source))
        else:
            self.event_bus.queue_event(start_event(source))

    def _handle_resize(self, width: int, height: int) -> None:
        self.config.width = width
        self.config.height = height
        self._screen = pygame.display.set_mode(
            (width, height), pygame.DOUBLEBUF | pygame.RESIZABLE
        )
        self.renderer.resize(width, height)
        self.game.set_viewport_height(height)
        logger.info(f"Window resized: {width}x{height}")

    def _on_persistence_error(self, event: Event) -> None:
        logger.warning(f"High score not saved: {event.data.get('message', '')}")

    def _render(self) -> None:
        """Render the frame and its overlays."""
        if not self._screen:
            return

        snapshot = self.game.snapshot()
        buffer = self.renderer.render(snapshot)
        pygame.surfarray.blit_array(self._screen, np.ascontiguousarray(buffer.swapaxes(0, 1)))

        self._render_hud(snapshot)

        if snapshot.collectible.just_caught:
            self._blit_centered("+100", self._title_font, GOLD, self.config.height // 2)

        if snapshot.state == GameState.START:
            self._render_start_screen()
        elif snapshot.state == GameState.GAME_OVER:
            self._render_game_over(snapshot)
        else:
            self._render_help_line()

        if snapshot.is_new_record:
            self._render_record_banner(snapshot)

        if self._show_debug:
            self._render_debug_panel(snapshot)
        if self._show_log:
            self._render_log_panel()

        pygame.display.flip()

    def _render_hud(self, snapshot: GameSnapshot) -> None:
        lines = [(f"Score: {snapshot.score}", self._font, TEXT_DARK)]
        if snapshot.high_score > 0:
            lines.append((f"High Score: {snapshot.high_score}", self._small_font, TEXT_MUTED))

        width = max(font.size(text)[0] for text, font, _ in lines) + 24
        height = sum(font.get_linesize() for _, font, _ in lines) + 12
        pygame.draw.rect(self._screen, PANEL, pygame.Rect(16, 16, width, height), border_radius=8)

        y = 22
        for text, font, color in lines:
            self._screen.blit(font.render(text, True, color), (28, y))
            y += font.get_linesize()

    def _render_dialog(self, lines: list[tuple[str, pygame.font.Font, tuple[int, int, int]]]) -> None:
        w, h = self.config.width, self.config.height
        dialog_w = max(font.size(text)[0] for text, font, _ in lines) + 64
        dialog_h = sum(font.get_linesize() + 8 for _, font, _ in lines) + 48
        rect = pygame.Rect((w - dialog_w) // 2, (h - dialog_h) // 2, dialog_w, dialog_h)
        pygame.draw.rect(self._screen, PANEL, rect, border_radius=12)

        y = rect.y + 24
        for text, font, color in lines:
            surface = font.render(text, True, color)
            self._screen.blit(surface, (rect.centerx - surface.get_width() // 2, y))
            y += font.get_linesize() + 8

    def _render_start_screen(self) -> None:
        self._render_dialog([
            ("Bee Chase", self._title_font, TEXT_DARK),
            ("Help the bee catch the floating coin!", self._font, TEXT_MUTED),
            ("Tap or press SPACE / UP to jump and avoid obstacles", self._small_font, TEXT_MUTED),
            ("Press SPACE to start", self._font, TEXT_DARK),
        ])

    def _render_game_over(self, snapshot: GameSnapshot) -> None:
        prompt = "Press SPACE to play again" if snapshot.can_restart else "..."
        self._render_dialog([
            ("Game Over!", self._title_font, RED),
            (f"Final Score: {snapshot.score}", self._font, TEXT_DARK),
            (f"High Score: {snapshot.high_score}", self._small_font, TEXT_MUTED),
            ("The bee hit an obstacle while chasing the coin", self._small_font, TEXT_MUTED),
            (prompt, self._font, TEXT_DARK),
        ])

    def _render_help_line(self) -> None:
        text = self._small_font.render("TAP or SPACE/UP - Jump | Catch the coin", True, TEXT_LIGHT)
        x = (self.config.width - text.get_width()) // 2
        y = self.config.height - text.get_height() - 20
        backdrop = pygame.Surface((text.get_width() + 24, text.get_height() + 12), pygame.SRCALPHA)
        backdrop.fill((0, 0, 0, 128))
        self._screen.blit(backdrop, (x - 12, y - 6))
        self._screen.blit(text, (x, y))

    def _render_record_banner(self, snapshot: GameSnapshot) -> None:
        title = self._title_font.render("NEW RECORD!", True, TEXT_LIGHT)
        score = self._font.render(f"Score: {snapshot.high_score}", True, TEXT_LIGHT)
        w = max(title.get_width(), score.get_width()) + 48
        h = title.get_height() + score.get_height() + 24
        rect = pygame.Rect((self.config.width - w) // 2, self.config.height // 4 - h // 2, w, h)
        pygame.draw.rect(self._screen, (249, 115, 22), rect, border_radius=10)
        self._screen.blit(title, (rect.centerx - title.get_width() // 2, rect.y + 8))
        self._screen.blit(score, (rect.centerx - score.get_width() // 2, rect.y + 12 + title.get_height()))

    def _render_debug_panel(self, snapshot: GameSnapshot) -> None:
        fps = self._clock.get_fps() if self._clock else 0.0
        lines = [
            f"FPS: {fps:.0f}",
            f"State: {snapshot.state.name}",
            f"Generation: {self.game.generation}",
            f"Clock: {self.game.clock.now_ms / 1000:.1f}s",
            f"Speed: {snapshot.speed:.3f}",
            f"Obstacles: {len(snapshot.obstacles)}",
            f"Bee: ({snapshot.player.x:.0f}, {snapshot.player.y:.0f})",
            f"Coin: ({snapshot.collectible.x:.0f}, {snapshot.collectible.y:.0f})",
            f"Timers: {len(self.game.timers.pending())}",
            f"Restart: {'yes' if snapshot.can_restart else 'no'}",
            f"Last event: {self._last_event_name()}",
        ]
        y = 16
        for line in lines:
            surface = self._small_font.render(line, True, TEXT_DARK)
            self._screen.blit(surface, (self.config.width - 220, y))
            y += surface.get_height() + 2

    def _last_event_name(self) -> str:
        recent = [e for e in self.event_bus.get_history(limit=20) if e.type != EventType.FRAME]
        return recent[-1].type.name if recent else "-"

    def _render_log_panel(self) -> None:
        lines = self._log_buffer[-self._max_log_lines:]
        if not lines:
            return
        line_h = self._small_font.get_linesize()
        panel = pygame.Surface((self.config.width, line_h * len(lines) + 8), pygame.SRCALPHA)
        panel.fill((0, 0, 0, 170))
        y0 = self.config.height - panel.get_height()
        self._screen.blit(panel, (0, y0))
        for i, line in enumerate(lines):
            surface = self._small_font.render(line[:120], True, (200, 200, 220))
            self._screen.blit(surface, (8, y0 + 4 + i * line_h))

    def _blit_centered(self, text: str, font: pygame.font.Font, color, y: int) -> None:
        surface = font.render(text, True, color)
        self._screen.blit(surface, ((self.config.width - surface.get_width()) // 2, y - surface.get_height() // 2))

    async def run(self) -> None:
        """Main window loop."""
        self._init_pygame()
        self._running = True

        logger.info("Simulator started")

        while self._running:
            self._handle_events()
            await self.event_bus.process_queue()

            # Drive the game clock with real frame time
            if self._clock:
                self.game.update(self._clock.get_time())

            self._render()

            if self._clock:
                self._clock.tick(self.config.fps)

            # Yield to other tasks
            await asyncio.sleep(0)

        self._cleanup()

    def _cleanup(self) -> None:
        """Clean up pygame resources."""
        self.event_bus.emit(Event(EventType.SHUTDOWN, source="simulator"))
        logging.getLogger().removeHandler(self._log_handler)
        pygame.quit()
        logger.info("Simulator stopped")
