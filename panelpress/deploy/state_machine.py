"""Deterministic deployment state machine.

Enforces:
- Valid state transitions only (VALID_TRANSITIONS table)
- Terminal states are final
- Every transition recorded in order
"""

from __future__ import annotations

import logging

from panelpress.models.deploy import (
    TERMINAL_STATES,
    VALID_TRANSITIONS,
    DeployState,
    DeployTransition,
)

logger = logging.getLogger(__name__)


class InvalidTransitionError(RuntimeError):
    """Raised when a requested state transition is not valid."""


class DeployStateMachine:
    """Tracks one deployment run from ``idle`` to a terminal state.

    One instance per run; there is no reset.
    """

    def __init__(self) -> None:
        self._state = DeployState.IDLE
        self._history: list[DeployTransition] = []

    @property
    def state(self) -> DeployState:
        return self._state

    @property
    def history(self) -> list[DeployTransition]:
        """Snapshot of every transition so far, oldest first."""
        return list(self._history)

    @property
    def is_terminal(self) -> bool:
        return self._state in TERMINAL_STATES

    def can_transition(self, target_state: DeployState) -> bool:
        return target_state in VALID_TRANSITIONS.get(self._state, set())

    def transition(self, target_state: DeployState, detail: str = "") -> DeployTransition:
        """Move to ``target_state`` and record the transition.

        Raises ``InvalidTransitionError`` if the table does not allow it.
        """
        current = self._state
        if not self.can_transition(target_state):
            allowed = VALID_TRANSITIONS.get(current, set())
            raise InvalidTransitionError(
                f"Cannot transition from {current.value} to {target_state.value}. "
                f"Allowed: {sorted(s.value for s in allowed)}"
            )

        record = DeployTransition(
            from_state=current,
            to_state=target_state,
            detail=detail,
        )
        self._history.append(record)
        self._state = target_state
        logger.debug("Deploy state %s -> %s %s", current.value, target_state.value, detail)
        return record
