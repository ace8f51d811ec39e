"""
Game state machine.

States form a closed enum; every transition is checked against an
explicit table so a stray key press can't put the game somewhere it has
no screen for.
"""

from typing import Dict, FrozenSet, Optional

from evade.logging import get_logger
from evade.models import EvadeState

log = get_logger('state')

TRANSITIONS: Dict[EvadeState, FrozenSet[EvadeState]] = {
    EvadeState.LOADING: frozenset({EvadeState.MENU}),
    EvadeState.MENU: frozenset({EvadeState.PLAYING, EvadeState.SETTINGS, EvadeState.STATS}),
    EvadeState.SETTINGS: frozenset({EvadeState.MENU}),
    EvadeState.STATS: frozenset({EvadeState.MENU}),
    # PLAYING -> MENU is the recovery path after a failed tick
    EvadeState.PLAYING: frozenset({EvadeState.PAUSED, EvadeState.GAME_OVER, EvadeState.MENU}),
    EvadeState.PAUSED: frozenset({EvadeState.PLAYING, EvadeState.MENU}),
    EvadeState.GAME_OVER: frozenset({EvadeState.MENU, EvadeState.PLAYING}),
}


class StateManager:
    """Tracks the current and previous state.

    Examples:
        >>> states = StateManager()
        >>> states.set_state(EvadeState.MENU)
        True
        >>> states.set_state(EvadeState.PAUSED)
        False
        >>> states.current
        <EvadeState.MENU: 'menu'>
    """

    def __init__(self, initial: EvadeState = EvadeState.LOADING):
        self.current = initial
        self.previous: Optional[EvadeState] = None

    def is_(self, state: EvadeState) -> bool:
        return self.current == state

    def can_transition(self, target: EvadeState) -> bool:
        return target in TRANSITIONS.get(self.current, frozenset())

    def set_state(self, target: EvadeState) -> bool:
        """Move to target if the table allows it.

        Returns:
            True if the state changed
        """
        if not self.can_transition(target):
            log.warning("Rejected transition %s -> %s", self.current.value, target.value)
            return False

        log.debug("State %s -> %s", self.current.value, target.value)
        self.previous = self.current
        self.current = target
        return True

    def force(self, target: EvadeState) -> None:
        """Move to target without consulting the table (error recovery)."""
        log.warning("Forcing state %s -> %s", self.current.value, target.value)
        self.previous = self.current
        self.current = target

    def go_back(self) -> bool:
        """Return to the previous state (one step only)."""
        if self.previous is None:
            return False
        if not self.set_state(self.previous):
            return False
        # set_state stored the state we left; a second go_back is not allowed
        self.previous = None
        return True
