"""Study session engine: flip state, navigation, classification, and shuffling."""

from __future__ import annotations

import random
from collections import Counter
from collections.abc import Callable, Sequence
from dataclasses import dataclass

import structlog

from .config import DEFAULT_TITLE
from .models import Flashcard

logger = structlog.get_logger(__name__)

CompletionFn = Callable[[], None]


class EmptyDeckError(ValueError):
    """Raised when a study session is opened on a deck with no cards."""


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only view of session state for rendering."""

    title: str
    card: Flashcard
    position: int
    card_count: int
    is_flipped: bool
    is_shuffled: bool
    known_count: int
    review_count: int
    progress: float


class StudySession:
    """Owns the state of one study session over a fixed deck.

    The canonical deck is kept separately from ``order`` so that turning shuffle
    off always restores it. Known/review classifications are keyed by card id
    and stay valid under any permutation.
    """

    def __init__(
        self,
        deck: Sequence[Flashcard],
        title: str = DEFAULT_TITLE,
        on_complete: CompletionFn | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """Open a session at the first card of ``deck``."""
        if not deck:
            raise EmptyDeckError("Cannot start a study session with an empty deck.")
        self.title = title
        self._deck = tuple(deck)
        self._on_complete = on_complete
        self._rng = rng if rng is not None else random.Random()
        self._order = self._deck
        self._current_index = 0
        self._is_flipped = False
        self._is_shuffled = False
        self._known: set[str] = set()
        self._review: set[str] = set()

        duplicates = sorted(card_id for card_id, count in Counter(card.id for card in self._deck).items() if count > 1)
        if duplicates:
            logger.warning("duplicate_card_ids", title=title, card_ids=duplicates)
        logger.info("study_session_started", title=title, card_count=len(self._deck))

    @property
    def deck(self) -> tuple[Flashcard, ...]:
        return self._deck

    @property
    def order(self) -> tuple[Flashcard, ...]:
        return self._order

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def is_flipped(self) -> bool:
        return self._is_flipped

    @property
    def is_shuffled(self) -> bool:
        return self._is_shuffled

    @property
    def known(self) -> frozenset[str]:
        return frozenset(self._known)

    @property
    def review(self) -> frozenset[str]:
        return frozenset(self._review)

    @property
    def card_count(self) -> int:
        return len(self._order)

    @property
    def known_count(self) -> int:
        return len(self._known)

    @property
    def review_count(self) -> int:
        return len(self._review)

    @property
    def can_go_previous(self) -> bool:
        return self._current_index > 0

    @property
    def can_go_next(self) -> bool:
        return self._current_index < len(self._order) - 1

    @property
    def has_classifications(self) -> bool:
        """Whether any card has been marked known or for review."""
        return bool(self._known or self._review)

    def current_card(self) -> Flashcard:
        """Return the card at the current position."""
        return self._order[self._current_index]

    def progress(self) -> float:
        """Return position through the deck as a percentage in (0, 100]."""
        return (self._current_index + 1) / len(self._order) * 100

    def flip(self) -> None:
        """Toggle between question and answer."""
        self._is_flipped = not self._is_flipped

    def next(self) -> bool:
        """Advance one card, or signal completion when already on the last one.

        Returns whether the position changed.
        """
        if self.can_go_next:
            self._move_to(self._current_index + 1)
            return True
        logger.info(
            "study_session_completed",
            title=self.title,
            known=len(self._known),
            review=len(self._review),
            card_count=len(self._order),
        )
        if self._on_complete is not None:
            self._on_complete()
        return False

    def previous(self) -> bool:
        """Step back one card. Does nothing on the first card."""
        if not self.can_go_previous:
            return False
        self._move_to(self._current_index - 1)
        return True

    def mark_known(self) -> bool:
        """Classify the current card as mastered, then advance."""
        card_id = self.current_card().id
        self._known.add(card_id)
        self._review.discard(card_id)
        return self.next()

    def mark_for_review(self) -> bool:
        """Classify the current card as needing review, then advance."""
        card_id = self.current_card().id
        self._review.add(card_id)
        self._known.discard(card_id)
        return self.next()

    def toggle_shuffle(self) -> None:
        """Switch between a fresh random permutation and the canonical order."""
        self._is_shuffled = not self._is_shuffled
        if self._is_shuffled:
            self._order = tuple(self._rng.sample(self._deck, len(self._deck)))
        else:
            self._order = self._deck
        self._move_to(0)
        logger.debug("deck_shuffled", title=self.title, shuffled=self._is_shuffled)

    def reset(self) -> None:
        """Forget classifications and return to the first card."""
        self._known.clear()
        self._review.clear()
        self._move_to(0)
        logger.debug("session_progress_reset", title=self.title)

    def snapshot(self) -> SessionSnapshot:
        """Capture everything an embedding view needs after an operation."""
        return SessionSnapshot(
            title=self.title,
            card=self.current_card(),
            position=self._current_index + 1,
            card_count=len(self._order),
            is_flipped=self._is_flipped,
            is_shuffled=self._is_shuffled,
            known_count=len(self._known),
            review_count=len(self._review),
            progress=self.progress(),
        )

    def _move_to(self, index: int) -> None:
        # Any move, including a reset to the same index, shows the question face.
        self._current_index = index
        self._is_flipped = False
