"""
Phase/countdown state machine for one workout run.

The engine owns the timer state and nothing else: it does not keep time,
play sounds or persist anything.  A host feeds it one ``tick()`` per elapsed
second and subscribes to the events it emits.

Phase order is fixed:

    GET_READY -> WORK -> (REST -> WORK) * (sets - 1) -> COMPLETE

A phase of N seconds consumes exactly N ticks: the tick that brings the
countdown to zero also advances the phase.  A zero-length phase is still
entered (and its event emitted) and leaves on the following tick.
"""

from dataclasses import dataclass
from typing import Callable, Union

from loguru import logger

from .models import Phase, SessionConfiguration, TimerState


class InvalidConfiguration(ValueError):
    """Raised when durations or set count violate the configuration rules."""

    pass


@dataclass(frozen=True)
class PhaseStarted:
    """Emitted on entering WORK or REST."""

    phase: Phase
    set_number: int


@dataclass(frozen=True)
class WorkoutCompleted:
    """Emitted once, on entering COMPLETE."""

    config: SessionConfiguration


TimerEvent = Union[PhaseStarted, WorkoutCompleted]
Listener = Callable[[TimerEvent], None]


def validate_configuration(config: SessionConfiguration) -> None:
    """
    Check a configuration against the workout rules.

    Raises:
        InvalidConfiguration: If a duration is negative or not an integer,
            work_seconds is below 1, or sets is below 1
    """
    for name in ("get_ready_seconds", "work_seconds", "rest_seconds", "sets"):
        value = getattr(config, name)
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidConfiguration(f"{name} must be an integer, got {value!r}")

    if config.get_ready_seconds < 0:
        raise InvalidConfiguration("get_ready_seconds must be non-negative")
    if config.rest_seconds < 0:
        raise InvalidConfiguration("rest_seconds must be non-negative")
    if config.work_seconds < 1:
        raise InvalidConfiguration("work_seconds must be at least 1")
    if config.sets < 1:
        raise InvalidConfiguration("sets must be at least 1")


class WorkoutTimerEngine:
    """
    Deterministic countdown driver for an interval workout.

    Not thread-safe: ticks and user actions must arrive sequentially on one
    execution context.  Events are delivered synchronously, inside the call
    that caused them.
    """

    def __init__(self, config: SessionConfiguration | None = None):
        self._config: SessionConfiguration | None = None
        self._phase = Phase.GET_READY
        self._remaining = 0
        self._current_set = 1
        self._running = False
        self._listeners: list[Listener] = []

        if config is not None:
            self.configure(config)

    # ------------------------------------------------------------------
    # Subscription
    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> None:
        """Register a callable to receive PhaseStarted/WorkoutCompleted events."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _emit(self, event: TimerEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                # A collaborator failure must not stop the countdown.
                logger.exception(f"Timer listener {listener!r} failed on {event!r}")

    # ------------------------------------------------------------------
    # State access
    # ------------------------------------------------------------------

    @property
    def config(self) -> SessionConfiguration | None:
        return self._config

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def remaining_seconds(self) -> int:
        return self._remaining

    @property
    def current_set(self) -> int:
        return self._current_set

    @property
    def running(self) -> bool:
        return self._running

    @property
    def is_complete(self) -> bool:
        return self._phase is Phase.COMPLETE

    @property
    def state(self) -> TimerState:
        return TimerState(
            phase=self._phase,
            remaining_seconds=self._remaining,
            current_set=self._current_set,
            running=self._running,
        )

    @property
    def phase_duration(self) -> int:
        """Full length of the current phase in seconds (0 when complete)."""
        config = self._require_config()
        return {
            Phase.GET_READY: config.get_ready_seconds,
            Phase.WORK: config.work_seconds,
            Phase.REST: config.rest_seconds,
            Phase.COMPLETE: 0,
        }[self._phase]

    @property
    def elapsed_in_phase(self) -> int:
        return self.phase_duration - self._remaining

    def _require_config(self) -> SessionConfiguration:
        if self._config is None:
            raise InvalidConfiguration("Engine has not been configured")
        return self._config

    # ------------------------------------------------------------------
    # User actions
    # ------------------------------------------------------------------

    def configure(self, config: SessionConfiguration) -> None:
        """
        Load a configuration and return to the start of GET_READY.

        Raises:
            InvalidConfiguration: If the configuration is invalid; the
                previous state is left untouched
        """
        validate_configuration(config)
        self._config = config
        self._enter_get_ready()
        logger.debug(f"Engine configured: {config}")

    def start(self) -> None:
        self._require_config()
        if self._phase is not Phase.COMPLETE:
            self._running = True

    def pause(self) -> None:
        self._running = False

    def toggle(self) -> None:
        if self._running:
            self.pause()
        else:
            self.start()

    def reset(self) -> None:
        """Re-enter GET_READY with the last configuration and stop."""
        self._require_config()
        self._enter_get_ready()

    def _enter_get_ready(self) -> None:
        config = self._require_config()
        self._phase = Phase.GET_READY
        self._remaining = config.get_ready_seconds
        self._current_set = 1
        self._running = False

    # ------------------------------------------------------------------
    # Time
    # ------------------------------------------------------------------

    def tick(self) -> None:
        """
        Consume one elapsed second.

        No-op while paused or once complete.  The countdown never goes
        below zero: reaching zero advances the phase.
        """
        if not self._running or self._phase is Phase.COMPLETE:
            return

        if self._remaining > 0:
            self._remaining -= 1
            if self._remaining > 0:
                return

        self.advance_phase()

    def advance_phase(self) -> None:
        """Move to the next phase immediately (also used to skip)."""
        config = self._require_config()

        if self._phase is Phase.GET_READY:
            self._phase = Phase.WORK
            self._remaining = config.work_seconds
            self._emit(PhaseStarted(Phase.WORK, self._current_set))

        elif self._phase is Phase.WORK:
            if self._current_set < config.sets:
                self._phase = Phase.REST
                self._remaining = config.rest_seconds
                self._emit(PhaseStarted(Phase.REST, self._current_set))
            else:
                self._phase = Phase.COMPLETE
                self._remaining = 0
                self._running = False
                logger.info(f"Workout complete after {config.sets} sets")
                self._emit(WorkoutCompleted(config))

        elif self._phase is Phase.REST:
            self._current_set += 1
            self._phase = Phase.WORK
            self._remaining = config.work_seconds
            self._emit(PhaseStarted(Phase.WORK, self._current_set))

        # COMPLETE is terminal
