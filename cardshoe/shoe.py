"""Multi-deck shoe with cut-card reshuffling."""

import logging
from collections import Counter
from dataclasses import dataclass
from random import Random

from transitions import Machine

from cardshoe.cards import CARDS_PER_DECK, Card, standard_deck
from cardshoe.errors import ShoeIntegrityError
from cardshoe.events import EventEmitter, EventType
from cardshoe.state import ShoeState

logger = logging.getLogger(__name__)

DEFAULT_DECKS_PER_SHOE = 6

# Replace the shoe once a quarter of it is left: 6 * 52 * 0.25 = 78 cards.
DEFAULT_CUT_CARD_FRACTION = 0.25


def cut_card_threshold_for(
    decks_per_shoe: int,
    fraction: float = DEFAULT_CUT_CARD_FRACTION,
) -> int:
    """Return the remaining-card count below which a shoe is rebuilt."""
    return int(decks_per_shoe * CARDS_PER_DECK * fraction)


@dataclass(frozen=True, slots=True)
class ShoeStats:
    """Point-in-time summary of a shoe."""

    remaining: int
    total: int
    dealt: int
    percentage_remaining: float
    needs_reshuffle: bool


class Shoe:
    """
    A multi-deck shoe that deals one card at a time.

    The shoe is built from ``decks_per_shoe`` full decks and shuffled on
    construction. Whenever fewer than ``cut_card_threshold`` cards remain
    at the start of a deal, the whole shoe is rebuilt and reshuffled before
    the card is dealt. The card sequence itself is never exposed.

    Not thread-safe: one shoe belongs to one table, and callers sharing a
    shoe between threads must serialise access themselves.
    """

    # State machine states
    STATES = [s.name.lower() for s in ShoeState]

    # State machine transitions
    TRANSITIONS = [
        {"trigger": "reach_cut_card", "source": "ready", "dest": "cut_card_reached"},
        {"trigger": "exhaust", "source": ["ready", "cut_card_reached"], "dest": "exhausted"},
        {"trigger": "refill", "source": "*", "dest": "ready"},
    ]

    def __init__(
        self,
        decks_per_shoe: int = DEFAULT_DECKS_PER_SHOE,
        cut_card_threshold: int | None = None,
        cut_card_fraction: float = DEFAULT_CUT_CARD_FRACTION,
        rng: Random | None = None,
        events: EventEmitter | None = None,
    ) -> None:
        """
        Initialize, build and shuffle a shoe.

        Args:
            decks_per_shoe: Number of 52-card decks combined in the shoe
            cut_card_threshold: Absolute remaining-card count that triggers a
                rebuild; derived from cut_card_fraction when None
            cut_card_fraction: Fraction of the full shoe used as the threshold
            rng: Random number generator for shuffling (seed it for tests)
            events: Emitter to publish shoe events on
        """
        if decks_per_shoe < 1:
            raise ValueError("Shoe must have at least 1 deck")

        total_cards = decks_per_shoe * CARDS_PER_DECK
        if cut_card_threshold is None:
            if not 0.0 <= cut_card_fraction < 1.0:
                raise ValueError("Cut card fraction must be in [0, 1)")
            cut_card_threshold = cut_card_threshold_for(decks_per_shoe, cut_card_fraction)
        if not 0 <= cut_card_threshold < total_cards:
            raise ValueError(
                f"Cut card threshold must be between 0 and {total_cards - 1}, "
                f"got {cut_card_threshold}"
            )

        self._decks_per_shoe = decks_per_shoe
        self._cut_card_threshold = cut_card_threshold
        self._rng = rng or Random()
        self._events = events if events is not None else EventEmitter()
        self._cards: list[Card] = []
        self._shoe_number = 0

        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="ready",
            auto_transitions=False,
            model_attribute="_machine_state",
        )

        self._build()
        self.shuffle()

    def _build(self) -> None:
        """Replace the contents with freshly ordered decks."""
        cards = [card for _ in range(self._decks_per_shoe) for card in standard_deck()]
        self._verify_build(cards)

        self._cards = cards
        self._shoe_number += 1
        self.refill()
        logger.info(
            "Built shoe #%d: %d decks, %d cards",
            self._shoe_number,
            self._decks_per_shoe,
            len(cards),
        )
        self._events.emit_new(
            EventType.SHOE_BUILT,
            shoe_number=self._shoe_number,
            total_cards=len(cards),
        )

    def _verify_build(self, cards: list[Card]) -> None:
        """Check a freshly built sequence holds every card exactly once per deck."""
        counts = Counter(cards)

        if len(counts) != CARDS_PER_DECK:
            self._integrity_failure(
                "Wrong number of distinct cards in built shoe",
                CARDS_PER_DECK,
                len(counts),
            )
        if len(cards) != self.total_cards:
            self._integrity_failure(
                "Wrong total cards in built shoe",
                self.total_cards,
                len(cards),
            )
        for card, copies in counts.items():
            if copies != self._decks_per_shoe:
                self._integrity_failure(
                    f"Wrong number of copies of {card!r} in built shoe",
                    self._decks_per_shoe,
                    copies,
                )

        logger.debug(
            "Build validation passed: %d distinct cards, %d copies each",
            len(counts),
            self._decks_per_shoe,
        )

    def _integrity_failure(self, message: str, expected: int, actual: int) -> None:
        """Log a corrupted distribution and raise."""
        logger.error(
            "%s on shoe #%d: expected %d, got %d",
            message,
            self._shoe_number,
            expected,
            actual,
        )
        raise ShoeIntegrityError(message, expected, actual)

    def shuffle(self) -> None:
        """
        Shuffle the remaining cards in place with Fisher-Yates.

        Only the order changes; the cards held are the same before and after.
        The same seeded rng always produces the same permutation.
        If the shuffle changes the cards, the previous order is restored
        before ShoeIntegrityError is raised.
        """
        snapshot = list(self._cards)
        before = Counter(snapshot)

        cards = self._cards
        for i in range(len(cards) - 1, 0, -1):
            j = self._rng.randrange(i + 1)
            cards[i], cards[j] = cards[j], cards[i]

        after = Counter(cards)
        if after != before:
            self._cards = snapshot
            self._integrity_failure(
                "Shuffle changed the cards in the shoe",
                sum(before.values()),
                sum(after.values()),
            )

        logger.info("Shuffled shoe #%d (%d cards)", self._shoe_number, len(cards))
        self._events.emit_new(
            EventType.SHOE_SHUFFLED,
            shoe_number=self._shoe_number,
            remaining=len(cards),
        )

    def deal(self) -> Card | None:
        """
        Deal one card from the top of the shoe.

        Rebuilds and reshuffles first if the cut card has been reached.

        Returns:
            The dealt card, or None if no card is available
        """
        if self.needs_reshuffle:
            logger.info(
                "Cut card reached on shoe #%d with %d cards remaining, rebuilding",
                self._shoe_number,
                len(self._cards),
            )
            self._events.emit_new(EventType.CUT_CARD_REACHED, remaining=len(self._cards))
            self.reset()

        if not self._cards:
            logger.debug("Shoe #%d is empty", self._shoe_number)
            self._events.emit_new(EventType.SHOE_EXHAUSTED, shoe_number=self._shoe_number)
            return None

        card = self._cards.pop()
        logger.debug("Dealt %s (%d remaining)", card, len(self._cards))
        self._events.emit_new(EventType.CARD_DEALT, card=card, remaining=len(self._cards))

        if not self._cards:
            self.exhaust()
        elif self.needs_reshuffle and self.state == ShoeState.READY:
            self.reach_cut_card()
        return card

    def reset(self) -> None:
        """Discard everything and start a freshly built, shuffled shoe."""
        self._build()
        self._events.emit_new(EventType.SHOE_RESET, shoe_number=self._shoe_number)
        self.shuffle()

    def is_empty(self) -> bool:
        """Check if no cards remain."""
        return not self._cards

    def remaining_count(self) -> int:
        """Return the number of cards remaining."""
        return len(self._cards)

    def stats(self) -> ShoeStats:
        """Return a snapshot of how far the shoe has been dealt."""
        remaining = len(self._cards)
        return ShoeStats(
            remaining=remaining,
            total=self.total_cards,
            dealt=self.cards_dealt,
            percentage_remaining=round(remaining / self.total_cards * 100, 2),
            needs_reshuffle=self.needs_reshuffle,
        )

    @property
    def state(self) -> ShoeState:
        """Get current shoe state as enum."""
        return ShoeState[self._machine_state.upper()]  # type: ignore

    @property
    def needs_reshuffle(self) -> bool:
        """Check if the cut card has been reached."""
        return len(self._cards) < self._cut_card_threshold

    @property
    def decks_per_shoe(self) -> int:
        """Return the number of decks in the shoe."""
        return self._decks_per_shoe

    @property
    def cut_card_threshold(self) -> int:
        """Return the remaining-card count that triggers a rebuild."""
        return self._cut_card_threshold

    @property
    def total_cards(self) -> int:
        """Return the number of cards in a full shoe."""
        return self._decks_per_shoe * CARDS_PER_DECK

    @property
    def cards_dealt(self) -> int:
        """Return the number of cards dealt since the last build."""
        return self.total_cards - len(self._cards)

    @property
    def decks_remaining(self) -> float:
        """Return the estimated number of decks remaining."""
        return len(self._cards) / CARDS_PER_DECK

    @property
    def shoe_number(self) -> int:
        """Return how many times the shoe has been built."""
        return self._shoe_number

    @property
    def events(self) -> EventEmitter:
        """Return the emitter shoe events are published on."""
        return self._events

    def __len__(self) -> int:
        return len(self._cards)

    def __bool__(self) -> bool:
        """A shoe stays truthy when empty; use is_empty() to test for cards."""
        return True

    def __repr__(self) -> str:
        return (
            f"<Shoe #{self._shoe_number}: {len(self._cards)}/{self.total_cards} cards, "
            f"cut card at {self._cut_card_threshold}>"
        )
