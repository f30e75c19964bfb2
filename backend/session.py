"""
Session controller for a NeonSnake game.

Owns the simulation engine and its tick timer, wires user actions
(start / pause / restart / difficulty / direction) to it, persists new
high scores and forwards lifecycle events to observers such as the
commentary feed.
"""

import logging
import threading
from typing import Callable, List, Optional

from domain.constants import (
    DEFAULT_DIFFICULTY,
    EVENT_HIGHSCORE,
    GameStatus,
    difficulty_config,
    direction_for_key,
)
from domain.engine import LifecycleEvent, SimulationEngine
from domain.game_state import GameState


logger = logging.getLogger(__name__)


class GameTicker:
    """
    Calls `callback(stop_event)` every `interval_ms()` milliseconds on a
    daemon thread, passing the stop event of the run that fired it.

    The interval is read again before every wait, so a speed change takes
    effect from the next tick on without cutting the current wait short.
    Each start() gets its own stop event; stop() never joins, which makes
    it safe to call from inside the callback.
    """

    def __init__(self, callback: Callable[[threading.Event], object], interval_ms: Callable[[], int]):
        self._callback = callback
        self._interval_ms = interval_ms
        self._stop_event: Optional[threading.Event] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._stop_event is not None and not self._stop_event.is_set()

    def start(self) -> None:
        if self.running:
            return
        stop_event = threading.Event()
        self._stop_event = stop_event
        self._thread = threading.Thread(
            target=self._run, args=(stop_event,), name="game-ticker", daemon=True
        )
        self._thread.start()

    def stop(self) -> None:
        if self._stop_event is not None:
            self._stop_event.set()
        self._thread = None

    def _run(self, stop_event: threading.Event) -> None:
        while not stop_event.wait(self._interval_ms() / 1000.0):
            try:
                self._callback(stop_event)
            except Exception:
                logger.exception("Tick failed; stopping the ticker")
                stop_event.set()


class SessionController:
    """
    Manages:
      - The selected difficulty used by the next start()
      - The simulation engine and its periodic ticker
      - High score loading/saving through a store with
        load_high_score() / save_high_score(value)
      - Lifecycle event and snapshot observers

    Args:
        difficulty: difficulty selected at creation
        store: high score store, or None to keep the high score in memory
        on_event: called with each LifecycleEvent (start/eat/die/highscore)
        on_change: called with a GameState snapshot after every state change
        engine: pre-built engine, mostly for tests
        use_ticker: drive tick() from a GameTicker thread; tests pass False
            and call tick() themselves
    """

    def __init__(
        self,
        difficulty: str = DEFAULT_DIFFICULTY,
        store=None,
        on_event: Optional[Callable[[LifecycleEvent], None]] = None,
        on_change: Optional[Callable[[GameState], None]] = None,
        engine: Optional[SimulationEngine] = None,
        use_ticker: bool = True,
    ):
        difficulty_config(difficulty)
        self.difficulty = difficulty
        self.store = store
        self.on_event = on_event
        self.on_change = on_change
        self._lock = threading.RLock()

        self.engine = engine or SimulationEngine(difficulty=difficulty)
        saved = store.load_high_score() if store is not None else None
        self.engine.high_score = saved or 0

        self.ticker = GameTicker(self.tick, lambda: self.engine.speed) if use_ticker else None

    @property
    def status(self) -> str:
        return self.engine.status

    # ------------------------------------------------------------------
    # User actions
    # ------------------------------------------------------------------

    def start(self) -> bool:
        """
        Start a fresh game with the selected difficulty.

        Only IDLE and GAME_OVER sessions can start; otherwise this is a
        no-op returning False.
        """
        with self._lock:
            if not self.engine.can_start():
                logger.debug(f"Ignoring start while {self.engine.status}")
                return False
            event = self.engine.reset(self.difficulty)
            self._start_ticker()
            snapshot = self.snapshot()

        logger.info(f"Game started on {self.difficulty} (high score {event.high_score})")
        self._notify([event], snapshot)
        return True

    # Restarting is starting again from GAME_OVER.
    restart = start

    def pause(self) -> bool:
        """Toggle PLAYING <-> PAUSED; anything else is ignored."""
        with self._lock:
            if not self.engine.toggle_pause():
                return False
            if self.engine.status == GameStatus.PLAYING:
                self._start_ticker()
            else:
                self._stop_ticker()
            snapshot = self.snapshot()

        self._notify([], snapshot)
        return True

    def set_difficulty(self, difficulty: str) -> bool:
        """
        Select the difficulty for the next start(). Raises ValueError for
        unknown names; ignored (returns False) while a game is PLAYING.
        """
        difficulty_config(difficulty)
        with self._lock:
            if self.engine.status == GameStatus.PLAYING:
                return False
            self.difficulty = difficulty
            snapshot = self.snapshot()

        self._notify([], snapshot)
        return True

    def submit_direction(self, direction: str) -> bool:
        """
        Forward a direction to the turn arbiter. Accepted in any status;
        it only matters once steps run.
        """
        return self.engine.arbiter.submit_input(direction)

    def submit_key(self, key: str) -> bool:
        direction = direction_for_key(key)
        if direction is None:
            return False
        return self.submit_direction(direction)

    # ------------------------------------------------------------------
    # Timer entry
    # ------------------------------------------------------------------

    def tick(self, stop_event: Optional[threading.Event] = None) -> List[LifecycleEvent]:
        """
        Run one simulation step if a game is PLAYING.

        A tick that arrives after a pause or game over is dropped. The
        ticker passes the stop event of the run that fired; once that run
        has been stopped its tick is dropped too, even if a resume has
        already put the game back to PLAYING.
        """
        with self._lock:
            if stop_event is not None and stop_event.is_set():
                return []
            if self.engine.status != GameStatus.PLAYING:
                return []
            events = self.engine.step()
            if self.engine.status == GameStatus.GAME_OVER:
                self._stop_ticker()
                self._on_game_over(events)
            snapshot = self.snapshot()

        self._notify(events, snapshot)
        return events

    def _on_game_over(self, events: List[LifecycleEvent]) -> None:
        for event in events:
            if event.type == EVENT_HIGHSCORE:
                logger.info(f"New high score: {event.score}")
                if self.store is not None:
                    self.store.save_high_score(event.score)
            else:
                logger.info(f"Game over with score {event.score} (high score {event.high_score})")

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------

    def snapshot(self) -> GameState:
        with self._lock:
            engine = self.engine
            return GameState(
                snake=list(engine.snake.positions),
                food=engine.food,
                status=engine.status,
                score=engine.score,
                high_score=engine.high_score,
                difficulty=self.difficulty,
                speed=engine.speed,
                speed_progress=engine.speed_progress(),
                board_size=engine.board_size,
            )

    def _notify(self, events: List[LifecycleEvent], snapshot: GameState) -> None:
        if self.on_change is not None:
            try:
                self.on_change(snapshot)
            except Exception:
                logger.exception("Snapshot observer failed")
        if self.on_event is not None:
            for event in events:
                try:
                    self.on_event(event)
                except Exception:
                    logger.exception(f"Event observer failed on '{event.type}'")

    # ------------------------------------------------------------------
    # Ticker plumbing
    # ------------------------------------------------------------------

    def _start_ticker(self) -> None:
        if self.ticker is not None:
            self.ticker.start()

    def _stop_ticker(self) -> None:
        if self.ticker is not None:
            self.ticker.stop()

    def close(self) -> None:
        """Stop the ticker; the session can no longer advance on its own."""
        self._stop_ticker()
