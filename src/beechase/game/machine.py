"""
Session orchestration for Bee Chase.

GameStateMachine ties the clock, the entity model, spawning, collision
and scoring together behind two intents (start, jump) and a per-frame
update call.

Each tick is computed on a copy of the entity model (advance, spawn,
collide, catch-check) and only committed together with the score and
speed update when the bee survived. A hit throws the copy away and
moves to GAME_OVER once, after the computation finished.

Delayed effects (jump settle, catch cooldown, restart gate, record
banner) are timers tagged with the session generation; starting a new
session bumps the generation and cancels them.
"""

import logging
import random
import time
from dataclasses import dataclass
from typing import Callable, List, Optional

from beechase.config.settings import GameSettings
from beechase.core.clock import Clock, TimerQueue
from beechase.core.events import Event, EventBus, EventType
from beechase.core.state import GameState, StateContext, StateMachine
from beechase.game.collision import catches_collectible, first_hit
from beechase.game.entities import EntityModel, Obstacle, ground_level_for
from beechase.game.score import FinalizeResult, ScoreKeeper
from beechase.game.snapshot import (
    CollectibleView,
    GameSnapshot,
    ObstacleView,
    PlayerView,
)
from beechase.game.spawn import SpawnController
from beechase.storage.base import HighScoreStore

logger = logging.getLogger(__name__)


@dataclass
class TickOutcome:
    """Result of computing one tick before it is committed."""

    world: EntityModel
    hit: Optional[Obstacle] = None
    caught: bool = False
    spawned: Optional[Obstacle] = None


class GameStateMachine:
    """Runs Bee Chase sessions: start, playing, game over, restart.

    Args:
        settings: Simulation constants
        store: High score persistence
        event_bus: Optional bus for intents in and notifications out
        rng: Random source for spawns (seed it for reproducible runs)
        time_source: Wall clock in seconds, drives the collectible bob
    """

    def __init__(
        self,
        settings: GameSettings,
        store: HighScoreStore,
        event_bus: Optional[EventBus] = None,
        rng: Optional[random.Random] = None,
        time_source: Callable[[], float] = time.time,
    ):
        self.settings = settings
        self._time_source = time_source
        self._bus: Optional[EventBus] = None
        self._unsubscribers: List[Callable[[], None]] = []

        self.state_machine = StateMachine(GameState.START)
        self.state_machine.add_listener(self._on_state_changed)
        if event_bus is not None:
            self.attach(event_bus)

        self.clock = Clock(settings.tick_ms)
        self.timers = TimerQueue()
        self.spawner = SpawnController(settings, rng)
        self.scores = ScoreKeeper(
            store,
            catch_bonus=settings.catch_bonus,
            divisor=settings.score_divisor,
            on_persistence_error=self._on_persistence_error,
        )
        self.viewport_height: float = settings.viewport_height
        self.world = EntityModel(settings, self.ground_level)
        self.speed = settings.speed_floor
        self.last_result: Optional[FinalizeResult] = None
        self.ticks = 0

    # Properties

    @property
    def state(self) -> GameState:
        return self.state_machine.state

    @property
    def context(self) -> StateContext:
        return self.state_machine.context

    @property
    def is_playing(self) -> bool:
        return self.state_machine.is_playing

    @property
    def can_restart(self) -> bool:
        return self.context.restart_allowed

    @property
    def generation(self) -> int:
        return self.context.generation

    @property
    def is_new_record(self) -> bool:
        return self.context.is_new_record

    @property
    def ground_level(self) -> float:
        return ground_level_for(self.viewport_height, self.settings)

    # Event bus wiring

    def attach(self, bus: EventBus) -> None:
        """Listen for intents on the bus and publish notifications to it."""
        self.detach()
        self._bus = bus
        self._unsubscribers = [
            bus.subscribe(EventType.JUMP, lambda event: self.on_jump()),
            bus.subscribe(EventType.START, lambda event: self.on_start()),
        ]

    def detach(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []
        self._bus = None

    def _emit(self, event_type: EventType, **data) -> None:
        if self._bus is not None:
            self._bus.emit(Event(event_type, data=data, source="game"))

    def _publish_frame(self) -> None:
        if self._bus is not None:
            self._emit(EventType.FRAME, snapshot=self.snapshot())

    # Intents

    def on_start(self) -> bool:
        """Start a new session from START or GAME_OVER.

        Returns:
            True if a session started, False if the intent was ignored
        """
        if self.state not in (GameState.START, GameState.GAME_OVER):
            logger.debug(f"Start ignored in {self.state.name}")
            return False
        if not self.context.restart_allowed:
            logger.debug("Start ignored, restart gate closed")
            return False

        self.timers.cancel_all()
        self.world.reset(self.ground_level)
        self.scores.reset()
        self.speed = self.settings.speed_floor
        self.last_result = None
        self.ticks = 0
        self.clock.reset()

        self.state_machine.transition(
            GameState.PLAYING,
            generation=self.generation + 1,
            restart_allowed=True,
            is_new_record=False,
        )
        self._emit(EventType.GAME_STARTED, generation=self.generation)
        self._publish_frame()
        return True

    def on_jump(self) -> bool:
        """Hop while playing; ignored in other states or while airborne."""
        if not self.is_playing:
            logger.debug(f"Jump ignored in {self.state.name}")
            return False
        if not self.world.jump():
            return False

        self._schedule("settle", self.settings.jump_duration_ms, self._settle)
        return True

    def set_viewport_height(self, height: float) -> None:
        """Track the layout's viewport height.

        Between sessions the resting positions move right away; a
        running session picks the new ground line up at its next start.
        """
        self.viewport_height = height
        if not self.is_playing:
            self.world.reset(self.ground_level)
            logger.debug(f"Viewport height {height}, ground at {self.ground_level:.0f}")

    # Clock

    def update(self, delta_ms: float) -> int:
        """Advance real time by delta_ms, firing timers and running ticks.

        Returns:
            Number of ticks run
        """
        ran = 0
        for now_ms in self.clock.advance(delta_ms):
            self.timers.advance_to(now_ms, self.generation)
            if self.is_playing:
                self.tick()
                ran += 1
        return ran

    def tick(self) -> Optional[TickOutcome]:
        """Run one simulation step; no-op outside PLAYING."""
        if not self.is_playing:
            return None

        outcome = self.compute_tick(self._time_source() * 1000.0)

        if outcome.hit is not None:
            self._game_over(outcome.hit)
        else:
            self._commit(outcome)
        return outcome

    def compute_tick(self, now_ms: float) -> TickOutcome:
        """Advance, spawn, collide and catch-check on a copy of the world."""
        s = self.settings
        world = self.world.clone()

        exited = world.advance(self.speed, now_ms)
        spawned = self.spawner.maybe_spawn_obstacle(world)
        if exited:
            self.spawner.respawn_collectible(world.collectible)

        hit = first_hit(world.player, world.obstacles, s.hit_padding)
        caught = False
        if hit is None and not world.collectible.just_caught:
            caught = catches_collectible(world.player, world.collectible, s.catch_radius)

        return TickOutcome(world=world, hit=hit, caught=caught, spawned=spawned)

    def _commit(self, outcome: TickOutcome) -> None:
        s = self.settings
        self.world = outcome.world

        if outcome.spawned is not None:
            self._emit(EventType.OBSTACLE_SPAWNED, id=outcome.spawned.id)

        if outcome.caught:
            self.world.collectible.just_caught = True
            self._schedule("catch_cooldown", s.catch_cooldown_ms, self._end_catch_cooldown)
            self._emit(EventType.COLLECTIBLE_CAUGHT, bonus=s.catch_bonus)
            logger.debug("Collectible caught")

        self.scores.tick(caught=outcome.caught)
        self.speed = min(self.speed + s.speed_step, s.speed_cap)
        self.ticks += 1
        self._publish_frame()

    def _game_over(self, obstacle: Obstacle) -> None:
        s = self.settings
        result = self.scores.finalize()
        self.last_result = result

        self.state_machine.transition(
            GameState.GAME_OVER,
            restart_allowed=False,
            is_new_record=result.is_new_record,
        )
        logger.info(
            f"Game over: hit obstacle {obstacle.id}, "
            f"score {result.display_score}, high {result.high_score}"
        )

        self._schedule("restart_gate", s.restart_delay_ms, self._open_restart_gate)
        if result.is_new_record:
            self._schedule("record_banner", s.record_banner_ms, self._expire_record)
            self._emit(EventType.NEW_RECORD, score=result.high_score)

        self._emit(
            EventType.GAME_OVER,
            score=result.display_score,
            high_score=result.high_score,
            is_new_record=result.is_new_record,
        )
        self._publish_frame()

    # Timers

    def _schedule(self, name: str, delay_ms: float, callback: Callable[[], None]) -> None:
        self.timers.schedule(name, delay_ms, callback, self.generation)

    def _settle(self) -> None:
        if self.is_playing and self.world.player.airborne:
            self.world.settle()

    def _end_catch_cooldown(self) -> None:
        if self.is_playing:
            self.spawner.respawn_collectible(self.world.collectible)

    def _open_restart_gate(self) -> None:
        self.context.restart_allowed = True
        logger.debug("Restart gate open")
        self._emit(EventType.RESTART_READY)
        self._publish_frame()

    def _expire_record(self) -> None:
        self.context.is_new_record = False
        self._emit(EventType.RECORD_EXPIRED)

    # Notifications

    def _on_state_changed(self, old: GameState, new: GameState, context: StateContext) -> None:
        self._emit(
            EventType.STATE_CHANGED,
            old=old.name,
            new=new.name,
            generation=context.generation,
        )

    def _on_persistence_error(self, message: str) -> None:
        self._emit(EventType.PERSISTENCE_ERROR, message=message)

    # Presentation

    def snapshot(self) -> GameSnapshot:
        """Read-only view of the current frame."""
        world = self.world
        return GameSnapshot(
            state=self.state,
            player=PlayerView.of(world.player),
            obstacles=tuple(ObstacleView.of(o) for o in world.obstacles),
            collectible=CollectibleView.of(world.collectible),
            score=self.scores.display,
            high_score=self.scores.high,
            is_new_record=self.is_new_record,
            can_restart=self.can_restart,
            ground_level=world.ground_level,
            speed=self.speed,
            frame=self.ticks,
        )
