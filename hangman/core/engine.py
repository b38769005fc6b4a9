from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, Iterable, List, Optional, Tuple

from .state import DEFAULT_LIVES, GameState, SessionEvent

logger = logging.getLogger(__name__)


def new_game(category, picker_fn: Callable[[object], str], max_lives: int = DEFAULT_LIVES) -> GameState:
    """
    Start a new round using `picker_fn` to choose the target word.

    Parameters
    ----------
    category : Category
        Passed through to the picker; the engine does not inspect it.
    picker_fn : Callable[[Category], str]
        Returns one alphabetic word. Usually `lambda c: c.pick(rng)`.
    max_lives : int, optional
        Wrong guesses allowed before the round is lost (default: 7).

    Returns
    -------
    GameState
        A fresh state in "in_progress" status with full lives.

    Raises
    ------
    ValueError
        If the picker returns an empty or non-alphabetic word.
    """
    word = (picker_fn(category) or "").strip()
    return GameState(target_word=word, remaining_lives=max_lives, max_lives=max_lives)


def mask_word(secret: str, guessed: Iterable[str], placeholder: str = "_") -> str:
    """
    Return the masked target word, e.g. 'C _ _'.

    Guessed letters are shown, the rest replaced by `placeholder`; letters are
    separated by single spaces so each position stays readable in the UI.
    """
    seen = set(guessed)
    return " ".join(c if c in seen else placeholder for c in secret)


def incorrect_letters(secret: str, guessed: Iterable[str]) -> List[str]:
    """Guessed letters that do not occur in `secret`, alphabetically."""
    return sorted(c for c in set(guessed) if c not in secret)


def all_revealed(secret: str, guessed: Iterable[str]) -> bool:
    seen = set(guessed)
    return all(c in seen for c in secret)


def normalize_letter(ch: object) -> Optional[str]:
    """Uppercase a single alphabetic character; anything else yields None."""
    if not isinstance(ch, str) or len(ch) != 1 or not ch.isalpha():
        return None
    upper = ch.upper()
    # Some letters (e.g. 'ß') uppercase to more than one character.
    return upper if len(upper) == 1 else None


def guess_letter(state: GameState, ch: object) -> Tuple[GameState, Optional[SessionEvent]]:
    """
    Apply a single-letter guess.

    Behavior
    --------
    - Ignores input if the round is not "in_progress".
    - Ignores non-alphabetic or multi-character inputs.
    - Repeated guesses are no-ops (idempotent).
    - A miss costs one life; reaching zero lives loses the round.
    - A hit that reveals every letter wins the round.

    Returns
    -------
    (GameState, SessionEvent | None)
        The new state and the emitted event. Ignored input returns the same
        state object and None.
    """
    if state.is_over:
        return state, None

    letter = normalize_letter(ch)
    if letter is None:
        return state, None  # ignore invalid input silently

    if letter in state.guessed:
        return state, None  # repeated guess; no changes

    guessed = state.guessed | {letter}

    if letter not in state.target_word:
        lives = state.remaining_lives - 1
        if lives <= 0:
            logger.debug("Guess %s missed; no lives left", letter)
            return replace(state, guessed=guessed, remaining_lives=0, status="lost"), SessionEvent.GAME_LOST
        logger.debug("Guess %s missed; %d lives left", letter, lives)
        return replace(state, guessed=guessed, remaining_lives=lives), SessionEvent.INCORRECT_GUESS

    if all_revealed(state.target_word, guessed):
        logger.debug("Guess %s revealed the last letter", letter)
        return replace(state, guessed=guessed, status="won"), SessionEvent.GAME_WON
    logger.debug("Guess %s hit", letter)
    return replace(state, guessed=guessed), SessionEvent.CORRECT_GUESS
