from __future__ import annotations

import logging
from typing import Optional

from openai import OpenAI

from hangman.config import Settings, load_settings

logger = logging.getLogger(__name__)

MAX_HINT_WORDS = 25


# Reject only if the hint literally contains the target word (case-insensitive).
def _contains_answer(text: str, word: str) -> bool:
    return word.lower() in (text or "").lower()


def local_hint(word: str, category_label: Optional[str] = None) -> str:
    """Always-available local hint (simple and safe)."""
    hint = f"The word has {len(word)} letters and starts with '{word[0].upper()}'."
    if category_label:
        hint = f"{category_label}: {hint}"
    return hint


def llm_hint(
    word: str,
    category_label: Optional[str] = None,
    settings: Optional[Settings] = None,
    client: Optional[OpenAI] = None,
    temperature: float = 0.8,
) -> str:
    """
    Return ONE hint for `word` using an LLM; fallback locally on failure.

    Rules
    -----
    - Accept any reply as long as it does NOT contain the word itself.
    - OFFLINE_MODE=true or a missing key skips the API entirely.
    - On any error or rule violation, return the deterministic local hint.
    """
    settings = settings or load_settings()
    if not settings.llm_enabled:
        return local_hint(word, category_label)

    client = client or OpenAI(api_key=settings.openai_api_key)

    system = "You are a helpful Hangman clue-giver."
    user = f"The secret word is '{word.upper()}'"
    if category_label:
        user += f" (category: {category_label})"
    user += (
        ". Give exactly ONE short, natural-sounding hint that helps a player guess the word. "
        "Do NOT include the word itself. Reply with the hint only."
    )

    try:
        resp = client.chat.completions.create(
            model=settings.model_name,
            messages=[{"role": "system", "content": system},
                      {"role": "user", "content": user}],
            temperature=temperature,
            max_tokens=80,
        )
        text = (resp.choices[0].message.content or "").strip()
    except Exception:
        logger.warning("Hint request failed; using local hint", exc_info=True)
        return local_hint(word, category_label)

    if not text or _contains_answer(text, word):
        logger.debug("Rejected LLM hint (empty or reveals the answer)")
        return local_hint(word, category_label)
    words = text.split()
    if len(words) > MAX_HINT_WORDS:
        text = " ".join(words[:MAX_HINT_WORDS])
    return text


__all__ = ["llm_hint", "local_hint"]
