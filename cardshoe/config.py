"""Configuration management with environment variable support."""

import logging
import os
from dataclasses import dataclass, field
from random import Random

from cardshoe.events import EventEmitter
from cardshoe.shoe import DEFAULT_CUT_CARD_FRACTION, DEFAULT_DECKS_PER_SHOE, Shoe


def _parse_seed() -> int | None:
    """Parse CARDSHOE_SEED environment variable."""
    seed = os.getenv("CARDSHOE_SEED", "").strip()
    return int(seed) if seed else None


@dataclass(frozen=True)
class ShoeConfig:
    """Default shoe configuration."""

    decks_per_shoe: int = field(
        default_factory=lambda: int(os.getenv("CARDSHOE_DECKS", str(DEFAULT_DECKS_PER_SHOE)))
    )
    cut_card_fraction: float = field(
        default_factory=lambda: float(
            os.getenv("CARDSHOE_CUT_CARD_FRACTION", str(DEFAULT_CUT_CARD_FRACTION))
        )
    )
    seed: int | None = field(default_factory=_parse_seed)
    log_level: str = field(
        default_factory=lambda: os.getenv("CARDSHOE_LOG_LEVEL", "WARNING").upper()
    )

    def build_shoe(self, events: EventEmitter | None = None) -> Shoe:
        """
        Create a shoe from this configuration.

        Args:
            events: Emitter to publish shoe events on

        Returns:
            A built and shuffled shoe, seeded when a seed is configured
        """
        rng = Random(self.seed) if self.seed is not None else None
        return Shoe(
            decks_per_shoe=self.decks_per_shoe,
            cut_card_fraction=self.cut_card_fraction,
            rng=rng,
            events=events,
        )


def configure_logging(level: str | None = None) -> logging.Logger:
    """
    Set the level of the ``cardshoe`` logger and give it a handler.

    Args:
        level: Level name such as "INFO"; falls back to the configured level

    Returns:
        The package logger
    """
    package_logger = logging.getLogger("cardshoe")
    package_logger.setLevel((level or config.log_level).upper())
    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        package_logger.addHandler(handler)
    return package_logger


# Global configuration instance
config = ShoeConfig()
