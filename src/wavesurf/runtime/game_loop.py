from __future__ import annotations

import pygame
from reactivex.disposable import Disposable
from reactivex.subject import Subject

from wavesurf.display.renderer import SurfRenderer
from wavesurf.game.provider import GameSessionStateProvider
from wavesurf.game.rules import FRAME_MS
from wavesurf.game.session import GameSession
from wavesurf.game.state import GameSnapshot
from wavesurf.input.keyboard import KeyboardCommands
from wavesurf.utilities.logging import get_logger

logger = get_logger(__name__)

WINDOW_TITLE = "Wave Surf"


class GameLoop:
    """Own the pygame window and pump one simulation tick per frame."""

    def __init__(
        self,
        session: GameSession,
        renderer: SurfRenderer,
        keyboard: KeyboardCommands,
        *,
        max_fps: int,
        fullscreen: bool = False,
    ) -> None:
        self.session = session
        self.renderer = renderer
        self.keyboard = keyboard
        self.max_fps = max_fps
        self.fullscreen = fullscreen
        self.running = False
        self.snapshot: GameSnapshot = session.snapshot()
        self._ticks: Subject[float] = Subject()
        self._subscription: Disposable | None = None
        self.provider = GameSessionStateProvider(
            session=session,
            ticks=self._ticks,
            commands=keyboard.observable(),
        )

    def _set_snapshot(self, snapshot: GameSnapshot) -> None:
        self.snapshot = snapshot

    def _open_window(self) -> pygame.Surface:
        flags = pygame.FULLSCREEN if self.fullscreen else pygame.RESIZABLE
        screen = pygame.display.set_mode(
            (self.session.width, self.session.height), flags
        )
        pygame.display.set_caption(WINDOW_TITLE)
        if self.fullscreen:
            self.session.resize(*screen.get_size())
        return screen

    def handle_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.VIDEORESIZE:
                self.session.resize(event.w, event.h)
            else:
                self.keyboard.handle_event(event)

    def step(self, elapsed_ms: float) -> GameSnapshot:
        self._ticks.on_next(elapsed_ms / FRAME_MS)
        return self.snapshot

    def attach(self) -> None:
        if self._subscription is None:
            self._subscription = self.provider.observable().subscribe(
                on_next=self._set_snapshot
            )

    def start(self) -> None:
        logger.info("Starting GameLoop at %d fps", self.max_fps)
        pygame.init()
        screen = self._open_window()
        clock = pygame.time.Clock()
        # Discard the time spent opening the window.
        clock.tick()
        self.keyboard.enable_key_repeat()

        self.attach()
        self.running = True
        try:
            while self.running:
                self.handle_events()
                self.step(clock.tick(self.max_fps))
                screen = pygame.display.get_surface() or screen
                self.renderer.render(screen, self.snapshot)
                pygame.display.flip()
        finally:
            self.stop()
            pygame.quit()

    def stop(self) -> None:
        self.running = False
        if self._subscription is not None:
            self._subscription.dispose()
            self._subscription = None
        self.keyboard.close()
