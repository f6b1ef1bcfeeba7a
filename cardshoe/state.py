"""Shoe state enumeration."""

from enum import Enum, auto


class ShoeState(Enum):
    """
    Shoe state machine states.

    Flow: READY → CUT_CARD_REACHED → READY (rebuilt on the next deal).
    A shoe with no cut card runs READY → EXHAUSTED instead and stays there
    until reset.
    """

    # Dealing normally
    READY = auto()

    # Fewer cards than the cut card threshold; the next deal rebuilds
    CUT_CARD_REACHED = auto()

    # No cards left
    EXHAUSTED = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()
