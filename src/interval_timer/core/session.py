"""
Workout session: one engine run wired to cues and history.

On completion the session builds the SessionRecord, estimates calories and
appends the record to history.  Persistence errors are logged; they never
reach the engine.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Callable

from loguru import logger

from .calories import estimate_for_record
from .config import MET
from .engine import TimerEvent, WorkoutCompleted, WorkoutTimerEngine
from .models import SessionConfiguration, SessionRecord

if TYPE_CHECKING:
    from ..io.history_store import SessionHistoryStore


@dataclass(frozen=True)
class WorkoutSummary:
    """What the completion screen shows."""

    record: SessionRecord
    calories: int
    saved: bool

    @property
    def total_seconds(self) -> int:
        return self.record.workout_seconds


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class WorkoutSession:
    """
    Host-side coordinator for a single workout.

    Listeners run in this order on every event: the cue player (if any),
    then the completion handler, then anything passed in ``listeners``.
    """

    def __init__(
        self,
        config: SessionConfiguration,
        history: "SessionHistoryStore",
        name: str = "",
        intention: str | None = None,
        weight_kg: float = 0.0,
        cue_player: Callable[[TimerEvent], None] | None = None,
        listeners: list[Callable[[TimerEvent], None]] | None = None,
        now: Callable[[], datetime] = _utc_now,
        met: float = MET,
    ):
        self.engine = WorkoutTimerEngine()
        self.engine.configure(config)  # raises InvalidConfiguration
        self.history = history
        self.name = name
        self.intention = intention
        self.weight_kg = weight_kg
        self.met = met
        self._now = now
        self.summary: WorkoutSummary | None = None

        if cue_player is not None:
            self.engine.subscribe(cue_player)
        self.engine.subscribe(self._on_event)
        for listener in listeners or []:
            self.engine.subscribe(listener)

    @property
    def is_complete(self) -> bool:
        return self.engine.is_complete

    def _on_event(self, event: TimerEvent) -> None:
        if isinstance(event, WorkoutCompleted):
            self.summary = self._complete(event.config)

    def _complete(self, config: SessionConfiguration) -> WorkoutSummary:
        record = SessionRecord(
            name=self.name,
            date=self._now(),
            work_seconds=config.work_seconds,
            rest_seconds=config.rest_seconds,
            sets=config.sets,
            intention=self.intention,
        )
        saved = True
        try:
            self.history.append(record)
        except OSError as e:
            logger.error(f"Could not save session {record.id}: {e}")
            saved = False
        calories = estimate_for_record(record, self.weight_kg, self.met)
        return WorkoutSummary(record=record, calories=calories, saved=saved)

    def run(
        self,
        sleep: Callable[[float], None],
        interval: float = 1.0,
        on_tick: Callable[[WorkoutTimerEngine], None] | None = None,
    ) -> WorkoutSummary | None:
        """
        Drive the engine to completion with a blocking tick loop.

        Args:
            sleep: Called with ``interval`` between ticks (time.sleep in
                production, a no-op in tests)
            interval: Seconds per tick
            on_tick: Called after every tick, e.g. to redraw a display

        Returns:
            The summary once complete

        KeyboardInterrupt pauses the engine and propagates to the caller.
        """
        self.engine.start()
        try:
            while not self.engine.is_complete:
                sleep(interval)
                self.engine.tick()
                if on_tick is not None:
                    on_tick(self.engine)
        except KeyboardInterrupt:
            self.engine.pause()
            raise
        return self.summary
