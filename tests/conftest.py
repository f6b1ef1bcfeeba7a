"""Pytest fixtures for card shoe tests."""

from random import Random

import pytest
from hypothesis import strategies as st

from cardshoe import Card, EventEmitter, Rank, Shoe, Suit


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def events():
    """A fresh event emitter."""
    return EventEmitter()


@pytest.fixture
def shoe(rng, events):
    """A shuffled 6-deck shoe with the default cut card."""
    return Shoe(decks_per_shoe=6, rng=rng, events=events)


@pytest.fixture
def single_deck_shoe(rng):
    """A one-deck shoe."""
    return Shoe(decks_per_shoe=1, rng=rng)


@pytest.fixture
def no_cut_card_shoe(rng):
    """A one-deck shoe that is never rebuilt automatically."""
    return Shoe(decks_per_shoe=1, cut_card_threshold=0, rng=rng)


@st.composite
def card_strategy(draw):
    """Generate a random card."""
    rank = draw(st.sampled_from(list(Rank)))
    suit = draw(st.sampled_from(list(Suit)))
    return Card(rank, suit)
