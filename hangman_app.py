from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Sequence

import streamlit as st

from hangman.config import Settings, load_settings
from hangman.logging_config import setup_logging

# --- Core game imports ---
from hangman.core.categories import Category, get_category, load_categories
from hangman.core.figure import describe, render_svg
from hangman.core.session import GameSession
from hangman.core.state import SessionEvent

# --- Collaborators ---
from hangman.services.audio import build_audio_cue
from hangman.services.hints import llm_hint

logger = logging.getLogger("hangman.app")

# A–Z in four rows: 7, 7, 6, 6
KEYBOARD_ROWS = ("ABCDEFG", "HIJKLMN", "OPQRST", "UVWXYZ")
_IMAGE_EXTS = (".png", ".jpg", ".jpeg", ".gif")


# =======================================
# Session-state helpers & game management
# =======================================

def _queue_cue(event: SessionEvent) -> None:
    """Session listener: remember the event so the next render can play it."""
    st.session_state["pending_cue"] = event


def _init_stats() -> None:
    """Ensure a stats dict exists in session state."""
    st.session_state.setdefault("stats", {"games": 0, "wins": 0, "losses": 0})


def _reset_stats() -> None:
    st.session_state["stats"] = {"games": 0, "wins": 0, "losses": 0}


def _ensure_session() -> GameSession:
    """One GameSession per browser session; created without a category."""
    session = st.session_state.get("session")
    if not isinstance(session, GameSession):
        session = GameSession(listener=_queue_cue)
        st.session_state["session"] = session
    st.session_state.setdefault("pending_cue", None)
    st.session_state.setdefault("round_counted", False)
    st.session_state.setdefault("hint", None)
    _init_stats()
    return session


def _reset_round_state() -> None:
    st.session_state["pending_cue"] = None
    st.session_state["round_counted"] = False
    st.session_state["hint"] = None


def _stop_audio() -> None:
    audio = st.session_state.get("audio")
    if audio is not None:
        audio.stop()


def _restart() -> None:
    _stop_audio()
    st.session_state["session"].reset()
    _reset_round_state()


def _select_category(category: Optional[Category]) -> None:
    """Pick, change or clear (None) the category; restarts only on a real change."""
    session: GameSession = st.session_state["session"]
    if session.change_category(category):
        _stop_audio()
        logger.info("Category set to %s", category.key if category else None)
        _reset_round_state()


def _on_letter(letter: str) -> None:
    st.session_state["session"].submit_guess(letter)


def _record_outcome(session: GameSession) -> None:
    """Count a finished round exactly once."""
    if not session.is_over or st.session_state.get("round_counted", False):
        return
    stats = st.session_state["stats"]
    stats["games"] += 1
    if session.is_won:
        stats["wins"] += 1
    elif session.is_lost:
        stats["losses"] += 1
    st.session_state["round_counted"] = True


def _find_image(image_dir: Optional[Path], name: str) -> Optional[Path]:
    if image_dir is None:
        return None
    for ext in _IMAGE_EXTS:
        path = image_dir / f"{name}{ext}"
        if path.is_file():
            return path
    return None


# =========
# Sections
# =========

def _category_picker(categories: Sequence[Category]) -> None:
    st.markdown("#### Choose a category to start")
    cols = st.columns(len(categories))
    for col, category in zip(cols, categories):
        col.button(
            category.label,
            key=f"pick_{category.key}",
            on_click=_select_category,
            args=(category,),
            use_container_width=True,
        )


def _keyboard(session: GameSession) -> None:
    guessed = session.guessed_letters
    enabled = session.accepts_guesses
    for row in KEYBOARD_ROWS:
        cols = st.columns(7)
        for col, letter in zip(cols, row):
            col.button(
                letter,
                key=f"key_{letter}",
                on_click=_on_letter,
                args=(letter,),
                disabled=not enabled or letter in guessed,
                use_container_width=True,
            )


def _controls(session: GameSession, categories: Sequence[Category]) -> None:
    c1, c2 = st.columns(2)
    c1.button(
        "🔁 Restart",
        key="restart",
        on_click=_restart,
        disabled=session.category is None,
        use_container_width=True,
    )
    with c2.popover("🗂️ Change category", use_container_width=True):
        for category in categories:
            st.button(
                category.label,
                key=f"menu_{category.key}",
                on_click=_select_category,
                args=(category,),
                use_container_width=True,
            )
        if session.category is not None:
            st.button(
                "✖️ Clear selection",
                key="menu_clear",
                on_click=_select_category,
                args=(None,),
                use_container_width=True,
            )


def _game_over(session: GameSession, settings: Settings) -> None:
    with st.container(border=True):
        image = _find_image(settings.image_dir, "win" if session.is_won else "lose")
        if image is not None:
            st.image(str(image), width=240)
        if session.is_won:
            st.success("🎉 You won!")
            st.markdown(f"**Answer:** `{session.target_word}`")
        else:
            st.error("💀 Game over")
            st.markdown(f"**The word was:** `{session.target_word}`")
        st.button("Play again", key="play_again", on_click=_restart, type="primary")


def _hint_section(session: GameSession, settings: Settings) -> None:
    with st.expander("Need a hint?"):
        if st.button("✨ Get a hint", key="hint_btn", disabled=not session.accepts_guesses):
            with st.spinner("Thinking..."):
                label = session.category.label if session.category else None
                st.session_state["hint"] = llm_hint(session.target_word, label, settings=settings)
        st.info(st.session_state["hint"] or "No hint yet.")


def _stats_sidebar() -> None:
    with st.sidebar:
        with st.expander("📊 Stats", expanded=True):
            s = st.session_state["stats"]
            games = s["games"]
            winrate = (s["wins"] / games * 100.0) if games else 0.0
            st.metric("Games", games)
            c1, c2 = st.columns(2); c1.metric("Wins", s["wins"]); c2.metric("Losses", s["losses"])
            st.metric("Win rate", f"{winrate:.1f}%")
            st.button("♻️ Reset stats", key="reset_stats", on_click=_reset_stats)


# =========
# The App
# =========

def main() -> None:
    settings = load_settings()
    setup_logging(use_json=settings.log_json, log_level=settings.log_level)

    st.set_page_config(page_title="Hangman", page_icon="🪢", layout="centered")

    categories = load_categories(settings.wordlist_dir)
    session = _ensure_session()
    # A category removed from the word-list directory since the last run.
    if session.category is not None and get_category(session.category.key, categories) is None:
        session.clear()
        _reset_round_state()

    if "audio" not in st.session_state:
        st.session_state["audio"] = build_audio_cue(settings)
    audio = st.session_state["audio"]
    event = st.session_state.get("pending_cue")
    if event is not None:
        st.session_state["pending_cue"] = None
        audio.play(event)

    _record_outcome(session)
    _stats_sidebar()

    if session.category is None:
        _category_picker(categories)

    st.markdown(
        f'<div style="display:flex;justify-content:center">{render_svg(session.figure_stage, max_lives=session.max_lives)}</div>',
        unsafe_allow_html=True,
    )
    st.caption(describe(session.figure_stage, session.max_lives))

    st.title("Hangman")
    if session.category is not None:
        st.subheader(f"Category: {session.category.label}")

    lives = session.remaining_lives
    if lives > 2:
        st.markdown(f"**Lives left:** {lives}")
    else:
        st.markdown(f"**Lives left:** :red[{lives}]")

    if session.is_active:
        st.markdown(f"## `{session.masked_word()}`")

    wrong = session.incorrect_guesses()
    if wrong:
        st.caption(f"Wrong: {''.join(wrong)}")

    _keyboard(session)
    _controls(session, categories)

    if session.is_over:
        _game_over(session, settings)
    elif session.is_active:
        _hint_section(session, settings)


if __name__ == "__main__":
    main()
