from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Literal


GameStatus = Literal["in_progress", "won", "lost"]

DEFAULT_LIVES = 7


class SessionEvent(str, Enum):
    """Outcome of an accepted guess, forwarded to audio/UI collaborators."""

    CORRECT_GUESS = "correct_guess"
    INCORRECT_GUESS = "incorrect_guess"
    GAME_WON = "game_won"
    GAME_LOST = "game_lost"

    @property
    def is_terminal(self) -> bool:
        return self in (SessionEvent.GAME_WON, SessionEvent.GAME_LOST)


@dataclass(frozen=True)
class GameState:
    """
    Immutable snapshot of one Hangman round.

    Notes
    -----
    - The engine never mutates a state; every accepted guess produces a new one.
      `GameSession` holds the latest snapshot on behalf of the UI.
    - Rule transitions live in `core.engine`; this module only defines the
      data structure plus normalization/validation.
    """

    target_word: str
    guessed: FrozenSet[str] = field(default_factory=frozenset)
    remaining_lives: int = DEFAULT_LIVES
    max_lives: int = DEFAULT_LIVES
    status: GameStatus = "in_progress"

    def __post_init__(self) -> None:
        """
        Normalize and validate fields.

        Normalization
        -------------
        - `target_word` is uppercased.
        - `guessed` letters are uppercased and restricted to single letters.

        Validation
        ----------
        - `target_word` must be non-empty and alphabetic.
        - `max_lives` must be >= 1.
        - `0 <= remaining_lives <= max_lives`.
        - `status` must be one of {"in_progress", "won", "lost"}.
        """
        word = (self.target_word or "").strip().upper()
        if not word.isalpha():
            raise ValueError("`target_word` must be non-empty and contain letters only.")
        object.__setattr__(self, "target_word", word)

        guessed = frozenset(
            c.upper() for c in (self.guessed or ()) if isinstance(c, str) and len(c) == 1 and c.isalpha()
        )
        object.__setattr__(self, "guessed", guessed)

        if self.max_lives < 1:
            raise ValueError("`max_lives` must be >= 1.")
        if not 0 <= self.remaining_lives <= self.max_lives:
            raise ValueError("`remaining_lives` must be between 0 and `max_lives`.")
        if self.status not in ("in_progress", "won", "lost"):
            raise ValueError("`status` must be one of {'in_progress', 'won', 'lost'}.")

    @property
    def lost_lives(self) -> int:
        return self.max_lives - self.remaining_lives

    @property
    def is_over(self) -> bool:
        return self.status != "in_progress"
