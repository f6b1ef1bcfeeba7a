"""Multi-deck card shoe with cut-card reshuffling."""

from cardshoe.cards import CARDS_PER_DECK, Card, Rank, Suit, standard_deck
from cardshoe.errors import ShoeIntegrityError
from cardshoe.events import EventEmitter, EventType, ShoeEvent
from cardshoe.state import ShoeState
from cardshoe.shoe import (
    DEFAULT_CUT_CARD_FRACTION,
    DEFAULT_DECKS_PER_SHOE,
    Shoe,
    ShoeStats,
    cut_card_threshold_for,
)

__all__ = [
    "CARDS_PER_DECK",
    "Card",
    "Rank",
    "Suit",
    "standard_deck",
    "ShoeIntegrityError",
    "ShoeState",
    "EventEmitter",
    "EventType",
    "ShoeEvent",
    "DEFAULT_CUT_CARD_FRACTION",
    "DEFAULT_DECKS_PER_SHOE",
    "Shoe",
    "ShoeStats",
    "cut_card_threshold_for",
]
