"""Run state machine: Idle -> Running -> Stopped -> (reset) -> Idle."""

from enum import Enum

from .errors import InvalidStateError


class RunState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    STOPPED = "stopped"


class RunStateMachine:
    """Tracks the lifecycle of a single recorder run."""

    def __init__(self) -> None:
        self._state = RunState.IDLE

    @property
    def state(self) -> RunState:
        return self._state

    @property
    def is_idle(self) -> bool:
        return self._state is RunState.IDLE

    @property
    def is_running(self) -> bool:
        return self._state is RunState.RUNNING

    @property
    def is_stopped(self) -> bool:
        return self._state is RunState.STOPPED

    def require_idle(self, action: str) -> None:
        """Raise InvalidStateError unless no run has started since the last reset."""
        if self._state is not RunState.IDLE:
            raise InvalidStateError(f"Cannot {action} while {self._state.value}")

    def start(self) -> None:
        self.require_idle("start")
        self._state = RunState.RUNNING

    def stop(self) -> None:
        if self._state is not RunState.RUNNING:
            raise InvalidStateError(f"Cannot stop while {self._state.value}")
        self._state = RunState.STOPPED

    def halt(self) -> bool:
        """Stop if running. Returns True when a transition happened."""
        if self._state is not RunState.RUNNING:
            return False
        self._state = RunState.STOPPED
        return True

    def reset(self) -> None:
        self._state = RunState.IDLE
