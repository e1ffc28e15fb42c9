"""
Tests for the workout timer state machine.

Covers phase order, tick accounting, pause/resume and the terminal state.
"""

import pytest

from interval_timer.core.engine import (
    InvalidConfiguration,
    PhaseStarted,
    WorkoutCompleted,
    WorkoutTimerEngine,
)
from interval_timer.core.models import Phase, SessionConfiguration


def _config(get_ready: int = 3, work: int = 20, rest: int = 10, sets: int = 3) -> SessionConfiguration:
    return SessionConfiguration(
        get_ready_seconds=get_ready,
        work_seconds=work,
        rest_seconds=rest,
        sets=sets,
    )


def _recording_engine(config: SessionConfiguration) -> tuple[WorkoutTimerEngine, list]:
    engine = WorkoutTimerEngine(config)
    events: list = []
    engine.subscribe(events.append)
    return engine, events


def _run_to_completion(engine: WorkoutTimerEngine, limit: int = 100_000) -> int:
    """Tick until complete; return the number of ticks consumed."""
    engine.start()
    ticks = 0
    while not engine.is_complete:
        engine.tick()
        ticks += 1
        assert ticks <= limit, "engine never completed"
    return ticks


# ===========================================================================
# configure
# ===========================================================================

class TestConfigure:
    """configure() resets to GET_READY and validates input."""

    def test_initial_state(self):
        engine = WorkoutTimerEngine(_config(get_ready=5))
        state = engine.state
        assert state.phase is Phase.GET_READY
        assert state.remaining_seconds == 5
        assert state.current_set == 1
        assert state.running is False

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"get_ready": -1},
            {"work": 0},
            {"work": -5},
            {"rest": -1},
            {"sets": 0},
        ],
    )
    def test_invalid_values_raise(self, kwargs):
        with pytest.raises(InvalidConfiguration):
            WorkoutTimerEngine(_config(**kwargs))

    def test_non_integer_duration_raises(self):
        with pytest.raises(InvalidConfiguration):
            WorkoutTimerEngine(SessionConfiguration(3, 20.5, 10, 3))  # type: ignore[arg-type]

    def test_invalid_configuration_is_value_error(self):
        assert issubclass(InvalidConfiguration, ValueError)

    def test_failed_configure_keeps_previous_state(self):
        engine = WorkoutTimerEngine(_config())
        with pytest.raises(InvalidConfiguration):
            engine.configure(_config(sets=0))
        assert engine.config == _config()

    def test_start_without_configuration_raises(self):
        with pytest.raises(InvalidConfiguration):
            WorkoutTimerEngine().start()

    def test_reconfigure_resets_progress(self):
        engine = WorkoutTimerEngine(_config())
        engine.advance_phase()
        engine.advance_phase()
        engine.configure(_config(get_ready=7, sets=2))
        assert engine.phase is Phase.GET_READY
        assert engine.remaining_seconds == 7
        assert engine.current_set == 1


# ===========================================================================
# advance_phase
# ===========================================================================

class TestAdvancePhase:
    """Fixed order GET_READY → WORK → (REST → WORK)* → COMPLETE."""

    def test_three_set_sequence(self):
        engine, events = _recording_engine(_config())
        seen = [(engine.phase, engine.current_set)]
        for _ in range(6):
            engine.advance_phase()
            seen.append((engine.phase, engine.current_set))

        assert seen == [
            (Phase.GET_READY, 1),
            (Phase.WORK, 1),
            (Phase.REST, 1),
            (Phase.WORK, 2),
            (Phase.REST, 2),
            (Phase.WORK, 3),
            (Phase.COMPLETE, 3),
        ]
        assert events == [
            PhaseStarted(Phase.WORK, 1),
            PhaseStarted(Phase.REST, 1),
            PhaseStarted(Phase.WORK, 2),
            PhaseStarted(Phase.REST, 2),
            PhaseStarted(Phase.WORK, 3),
            WorkoutCompleted(_config()),
        ]

    def test_remaining_seconds_set_per_phase(self):
        engine = WorkoutTimerEngine(_config(work=20, rest=10))
        engine.advance_phase()
        assert engine.remaining_seconds == 20
        engine.advance_phase()
        assert engine.remaining_seconds == 10

    def test_single_set_has_no_rest(self):
        engine, events = _recording_engine(_config(sets=1))
        engine.advance_phase()
        engine.advance_phase()
        assert engine.phase is Phase.COMPLETE
        assert [type(e) for e in events] == [PhaseStarted, WorkoutCompleted]

    def test_complete_is_terminal(self):
        engine, events = _recording_engine(_config(sets=1))
        engine.advance_phase()
        engine.advance_phase()
        before = engine.state
        engine.advance_phase()
        assert engine.state == before
        assert len(events) == 2

    @pytest.mark.parametrize("sets", [1, 2, 5, 12])
    def test_work_and_rest_counts(self, sets):
        engine, events = _recording_engine(_config(get_ready=0, work=1, rest=0, sets=sets))
        _run_to_completion(engine)
        work = [e for e in events if isinstance(e, PhaseStarted) and e.phase is Phase.WORK]
        rest = [e for e in events if isinstance(e, PhaseStarted) and e.phase is Phase.REST]
        assert len(work) == sets
        assert len(rest) == sets - 1
        assert sum(isinstance(e, WorkoutCompleted) for e in events) == 1


# ===========================================================================
# tick
# ===========================================================================

class TestTick:
    """One tick per elapsed second; a phase of N seconds takes N ticks."""

    def test_scenario_tick_total(self):
        # 3 + 20 + 10 + 20 + 10 + 20
        engine = WorkoutTimerEngine(_config(get_ready=3, work=20, rest=10, sets=3))
        assert _run_to_completion(engine) == 83

    def test_ticks_equal_total_seconds(self):
        config = _config(get_ready=2, work=7, rest=4, sets=4)
        engine = WorkoutTimerEngine(config)
        assert _run_to_completion(engine) == config.total_seconds

    def test_phase_transitions_exactly_once_after_remaining_ticks(self):
        engine = WorkoutTimerEngine(_config(get_ready=3, work=5))
        engine.start()
        for _ in range(2):
            engine.tick()
        assert engine.phase is Phase.GET_READY
        assert engine.remaining_seconds == 1
        engine.tick()
        assert engine.phase is Phase.WORK
        assert engine.remaining_seconds == 5

    def test_countdown_never_negative(self):
        engine = WorkoutTimerEngine(_config(get_ready=1, work=1, rest=0, sets=2))
        engine.start()
        while not engine.is_complete:
            engine.tick()
            assert engine.remaining_seconds >= 0

    def test_tick_ignored_while_paused(self):
        engine = WorkoutTimerEngine(_config())
        engine.tick()
        assert engine.remaining_seconds == 3
        assert engine.phase is Phase.GET_READY

    def test_zero_length_rest_still_occurs(self):
        engine, events = _recording_engine(_config(get_ready=0, work=2, rest=0, sets=2))
        engine.start()
        engine.tick()  # get-ready (0s) → work
        assert engine.phase is Phase.WORK
        engine.tick()
        engine.tick()  # work done → rest (0s)
        assert engine.phase is Phase.REST
        assert engine.remaining_seconds == 0
        engine.tick()  # rest leaves on the next tick
        assert engine.phase is Phase.WORK
        assert engine.current_set == 2
        assert PhaseStarted(Phase.REST, 1) in events

    def test_complete_is_idempotent_under_tick(self):
        engine, events = _recording_engine(_config(get_ready=0, work=1, rest=0, sets=1))
        _run_to_completion(engine)
        final = engine.state
        engine.start()
        for _ in range(10):
            engine.tick()
        assert engine.state == final
        assert sum(isinstance(e, WorkoutCompleted) for e in events) == 1

    def test_completion_stops_running(self):
        engine = WorkoutTimerEngine(_config(get_ready=0, work=1, rest=0, sets=1))
        _run_to_completion(engine)
        assert engine.running is False
        assert engine.remaining_seconds == 0


# ===========================================================================
# start / pause / reset
# ===========================================================================

class TestUserActions:
    """start/pause toggle running; reset re-enters GET_READY."""

    def test_start_and_pause_are_idempotent(self):
        engine = WorkoutTimerEngine(_config())
        engine.start()
        engine.start()
        assert engine.running is True
        engine.pause()
        engine.pause()
        assert engine.running is False

    def test_toggle(self):
        engine = WorkoutTimerEngine(_config())
        engine.toggle()
        assert engine.running is True
        engine.toggle()
        assert engine.running is False

    def test_pause_resume_preserves_state(self):
        engine = WorkoutTimerEngine(_config(get_ready=0, work=20))
        engine.start()
        for _ in range(8):
            engine.tick()
        engine.pause()
        paused = engine.state

        for _ in range(5):
            engine.tick()
        assert engine.state == paused

        engine.start()
        assert engine.phase is paused.phase
        assert engine.remaining_seconds == paused.remaining_seconds
        engine.tick()
        assert engine.remaining_seconds == paused.remaining_seconds - 1

    def test_reset_returns_to_get_ready(self):
        engine = WorkoutTimerEngine(_config(get_ready=4))
        engine.start()
        for _ in range(30):
            engine.tick()
        engine.reset()
        assert engine.state.phase is Phase.GET_READY
        assert engine.remaining_seconds == 4
        assert engine.current_set == 1
        assert engine.running is False

    def test_reset_after_complete_allows_rerun(self):
        engine = WorkoutTimerEngine(_config(get_ready=0, work=1, rest=0, sets=1))
        _run_to_completion(engine)
        engine.reset()
        assert engine.phase is Phase.GET_READY
        assert _run_to_completion(engine) == 2

    def test_elapsed_in_phase(self):
        engine = WorkoutTimerEngine(_config(get_ready=0, work=10))
        engine.start()
        engine.tick()
        for _ in range(3):
            engine.tick()
        assert engine.phase_duration == 10
        assert engine.elapsed_in_phase == 3


# ===========================================================================
# listeners
# ===========================================================================

class TestListeners:
    """Events are synchronous; failing listeners do not stop the timer."""

    def test_events_delivered_in_call_stack(self):
        engine = WorkoutTimerEngine(_config())
        seen_phase = []
        engine.subscribe(lambda e: seen_phase.append(engine.phase))
        engine.advance_phase()
        assert seen_phase == [Phase.WORK]

    def test_failing_listener_does_not_block_progress(self):
        engine = WorkoutTimerEngine(_config(sets=2))
        received = []

        def broken(event):
            raise RuntimeError("speaker unplugged")

        engine.subscribe(broken)
        engine.subscribe(received.append)
        engine.advance_phase()
        assert engine.phase is Phase.WORK
        assert received == [PhaseStarted(Phase.WORK, 1)]

    def test_unsubscribe(self):
        engine = WorkoutTimerEngine(_config())
        received = []
        engine.subscribe(received.append)
        engine.unsubscribe(received.append)
        engine.advance_phase()
        assert received == []
