from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)


def is_keyboard_word(word: str) -> bool:
    """True for words spelled only with the A-Z keyboard letters."""
    return word.isascii() and word.isalpha()


@dataclass(frozen=True)
class Category:
    """A named, fixed vocabulary the target word is drawn from."""

    key: str
    label: str
    words: Tuple[str, ...]

    def __post_init__(self) -> None:
        words = tuple(w.strip().upper() for w in self.words)
        if not words:
            raise ValueError(f"Category {self.key!r} has no words.")
        bad = [w for w in words if not is_keyboard_word(w)]
        if bad:
            raise ValueError(f"Category {self.key!r} has words outside A-Z: {bad}")
        object.__setattr__(self, "words", words)

    def pick(self, rng) -> str:
        """Choose one word uniformly with `rng` (anything with `.choice`)."""
        return rng.choice(self.words)


BUILTIN_CATEGORIES: Tuple[Category, ...] = (
    Category(
        key="animals",
        label="Animals",
        words=(
            "CAT", "DOG", "ELEPHANT", "TIGER", "LION",
            "GIRAFFE", "KANGAROO", "PANDA", "MONKEY", "ZEBRA",
            "WHALE", "DOLPHIN", "EAGLE", "OWL", "RABBIT",
        ),
    ),
    Category(
        key="objects",
        label="Objects",
        words=(
            "TABLE", "CHAIR", "COMPUTER", "PHONE", "BOTTLE",
            "UMBRELLA", "BACKPACK", "KEYBOARD", "HEADPHONE", "CAMERA",
            "NOTEBOOK", "PENCIL", "SCISSORS", "MIRROR", "CLOCK",
        ),
    ),
    Category(
        key="actions",
        label="Actions",
        words=(
            "RUN", "JUMP", "SWIM", "SING", "DANCE",
            "WRITE", "READ", "DRIVE", "COOK", "PAINT",
            "CLIMB", "THINK", "LAUGH", "CRY", "LISTEN",
        ),
    ),
)


def _read_words(path: Path) -> List[str]:
    """
    Read a UTF-8 word list and return uppercase alphabetic words.

    Notes
    -----
    - Blank lines and `#` comments are skipped.
    - Lines that are not a single A-Z word are skipped with a warning.
    - Duplicates are dropped, first occurrence wins.
    """
    words: List[str] = []
    raw = path.read_text(encoding="utf-8", errors="ignore").splitlines()
    for lineno, line in enumerate(raw, start=1):
        word = line.strip()
        if not word or word.startswith("#"):
            continue
        if not is_keyboard_word(word):
            logger.warning("Skipping %s:%d, not a single A-Z word: %r", path.name, lineno, word)
            continue
        word = word.upper()
        if word not in words:
            words.append(word)
    return words


def _label_for(key: str) -> str:
    return key.replace("_", " ").replace("-", " ").strip().title() or key


def load_wordlist_dir(directory: Path) -> List[Category]:
    """
    Build categories from `<key>.txt` files under `directory`.

    A missing directory or an empty file is not an error; it simply
    contributes nothing.
    """
    if not directory.is_dir():
        logger.debug("Word-list directory %s not found; using built-in categories only", directory)
        return []
    found: List[Category] = []
    for path in sorted(directory.glob("*.txt")):
        words = _read_words(path)
        if not words:
            logger.warning("Word list %s is empty; ignoring it", path)
            continue
        key = path.stem.lower()
        found.append(Category(key=key, label=_label_for(key), words=tuple(words)))
    return found


def load_categories(directory: Optional[Path] = None) -> Tuple[Category, ...]:
    """
    Return the category catalogue.

    Fallback strategy
    -----------------
    1) Start from `BUILTIN_CATEGORIES`, in their fixed order.
    2) Merge categories from `directory`: a file named after a built-in key
       replaces that category's words, other files are appended.
    """
    merged: Dict[str, Category] = {c.key: c for c in BUILTIN_CATEGORIES}
    if directory is not None:
        for cat in load_wordlist_dir(Path(directory)):
            base = merged.get(cat.key)
            if base is not None:
                cat = Category(key=base.key, label=base.label, words=cat.words)
            merged[cat.key] = cat
    return tuple(merged.values())


def get_category(key: Optional[str], categories: Optional[Sequence[Category]] = None) -> Optional[Category]:
    """Look up a category by key (case-insensitive); None when absent."""
    if not key:
        return None
    wanted = key.strip().lower()
    for cat in categories if categories is not None else BUILTIN_CATEGORIES:
        if cat.key == wanted:
            return cat
    return None
