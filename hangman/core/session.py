from __future__ import annotations

import logging
import random
from typing import Callable, List, Optional, Set

from .categories import Category
from .engine import guess_letter, incorrect_letters, mask_word, new_game
from .state import DEFAULT_LIVES, GameState, GameStatus, SessionEvent

logger = logging.getLogger(__name__)

EventListener = Callable[[SessionEvent], None]


class GameSession:
    """
    One player's Hangman round, owned by a single UI surface.

    The session keeps the latest immutable `GameState` (or None when no
    category is selected) and swaps it on every accepted guess. Word choice
    goes through `rng`, so tests can pass a seeded `random.Random`.
    """

    def __init__(
        self,
        category: Optional[Category] = None,
        rng: Optional[random.Random] = None,
        max_lives: int = DEFAULT_LIVES,
        listener: Optional[EventListener] = None,
    ) -> None:
        if max_lives < 1:
            raise ValueError("`max_lives` must be >= 1.")
        self._rng = rng if rng is not None else random.Random()
        self._max_lives = max_lives
        self._listener = listener
        self._category: Optional[Category] = None
        self._state: Optional[GameState] = None
        if category is not None:
            self.reset(category)

    # ---- lifecycle ----

    def reset(self, category: Optional[Category] = None) -> None:
        """
        Start a fresh round.

        With no argument the current category is reused; when there is none
        either, the session is cleared instead.
        """
        category = category if category is not None else self._category
        if category is None:
            self.clear()
            return
        self._category = category
        self._state = new_game(category, lambda c: c.pick(self._rng), max_lives=self._max_lives)
        logger.debug("New round in category %s (%d letters)", category.key, len(self._state.target_word))

    def clear(self) -> None:
        """Drop the category and word; the keyboard stays disabled until reset."""
        self._category = None
        self._state = None

    def change_category(self, category: Optional[Category]) -> bool:
        """Switch category and restart; returns False when nothing changed."""
        if category is None:
            had = self._category is not None
            self.clear()
            return had
        if self._category is not None and self._category.key == category.key:
            return False
        self.reset(category)
        return True

    # ---- guesses ----

    def submit_guess(self, letter: object) -> Optional[SessionEvent]:
        """
        Apply a letter guess and return the resulting event.

        Invalid letters, repeats, guesses without a word and guesses after the
        round ended are silent no-ops that return None.
        """
        if self._state is None:
            return None
        state, event = guess_letter(self._state, letter)
        if event is None:
            return None
        self._state = state
        if event.is_terminal:
            logger.info(
                "Round %s in category %s after %d guesses",
                "won" if event is SessionEvent.GAME_WON else "lost",
                self._category.key if self._category else "-",
                len(state.guessed),
            )
        self._notify(event)
        return event

    def _notify(self, event: SessionEvent) -> None:
        if self._listener is None:
            return
        try:
            self._listener(event)
        except Exception:
            logger.warning("Event listener failed for %s", event.value, exc_info=True)

    # ---- derived state ----

    @property
    def category(self) -> Optional[Category]:
        return self._category

    @property
    def max_lives(self) -> int:
        return self._max_lives

    @property
    def target_word(self) -> str:
        return self._state.target_word if self._state else ""

    @property
    def guessed_letters(self) -> Set[str]:
        return set(self._state.guessed) if self._state else set()

    @property
    def remaining_lives(self) -> int:
        return self._state.remaining_lives if self._state else self._max_lives

    @property
    def status(self) -> GameStatus:
        return self._state.status if self._state else "in_progress"

    @property
    def figure_stage(self) -> int:
        return self._state.lost_lives if self._state else 0

    @property
    def is_active(self) -> bool:
        return self._state is not None

    @property
    def accepts_guesses(self) -> bool:
        return self._state is not None and not self._state.is_over

    @property
    def is_over(self) -> bool:
        return self.status != "in_progress"

    @property
    def is_won(self) -> bool:
        return self.status == "won"

    @property
    def is_lost(self) -> bool:
        return self.status == "lost"

    def masked_word(self, placeholder: str = "_") -> str:
        if self._state is None:
            return ""
        return mask_word(self._state.target_word, self._state.guessed, placeholder)

    def incorrect_guesses(self) -> List[str]:
        if self._state is None:
            return []
        return incorrect_letters(self._state.target_word, self._state.guessed)

    def __repr__(self) -> str:
        cat = self._category.key if self._category else None
        return f"GameSession(category={cat!r}, status={self.status!r}, lives={self.remaining_lives})"
