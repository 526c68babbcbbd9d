"""
Shared stadium slot.

The only state both sides of a table share. Sessions never call each other:
each one subscribes to the slot and reacts to the value changing
(observe_stadium), trashing the stadium it had been displaying.
"""

import itertools
import logging
from collections.abc import Callable

from deckpractice.engine.state import StadiumPlacement
from deckpractice.models.card import CardInstance

logger = logging.getLogger(__name__)

StadiumListener = Callable[[StadiumPlacement | None], None]


class SharedStadium:
    """Holds the current stadium placement and notifies subscribers on change."""

    def __init__(self) -> None:
        self._current: StadiumPlacement | None = None
        self._listeners: list[StadiumListener] = []
        self._serials = itertools.count(1)

    @property
    def current(self) -> StadiumPlacement | None:
        return self._current

    def subscribe(self, listener: StadiumListener) -> None:
        """Register a listener; it is called immediately with the current value."""
        self._listeners.append(listener)
        listener(self._current)

    def place(self, card: CardInstance, owner: str) -> StadiumPlacement:
        """Put a new stadium card in play, replacing the current one."""
        placement = StadiumPlacement(card=card, owner=owner, serial=next(self._serials))
        logger.info("Stadium %s placed by %s", card.name, owner)
        self._set(placement)
        return placement

    def clear(self) -> None:
        """Remove the current stadium; its owner trashes it."""
        if self._current is None:
            return
        logger.info("Stadium %s cleared", self._current.card.name)
        self._set(None)

    def _set(self, placement: StadiumPlacement | None) -> None:
        self._current = placement
        for listener in list(self._listeners):
            listener(placement)
