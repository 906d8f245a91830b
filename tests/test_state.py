"""Tests for the run state machine."""

import pytest

from canvas_recorder import InvalidStateError, RunState
from canvas_recorder.state import RunStateMachine


def test_starts_idle():
    machine = RunStateMachine()

    assert machine.state is RunState.IDLE
    assert machine.is_idle


def test_full_lifecycle():
    """Idle -> Running -> Stopped -> Idle."""
    machine = RunStateMachine()

    machine.start()
    assert machine.is_running
    machine.stop()
    assert machine.is_stopped
    machine.reset()
    assert machine.is_idle


def test_start_requires_idle():
    """start should fail while running and after stopping."""
    machine = RunStateMachine()
    machine.start()

    with pytest.raises(InvalidStateError):
        machine.start()

    machine.stop()
    with pytest.raises(InvalidStateError):
        machine.start()


def test_stop_requires_running():
    """stop should fail before a run starts and after it stops."""
    machine = RunStateMachine()

    with pytest.raises(InvalidStateError):
        machine.stop()

    machine.start()
    machine.stop()
    with pytest.raises(InvalidStateError):
        machine.stop()


def test_halt_only_transitions_from_running():
    """halt is a no-op unless a run is active."""
    machine = RunStateMachine()

    assert machine.halt() is False
    assert machine.is_idle

    machine.start()
    assert machine.halt() is True
    assert machine.is_stopped
    assert machine.halt() is False


def test_require_idle_names_the_action():
    """The error message should say what was refused and why."""
    machine = RunStateMachine()
    machine.start()

    with pytest.raises(InvalidStateError, match="Cannot configure while running"):
        machine.require_idle("configure")
