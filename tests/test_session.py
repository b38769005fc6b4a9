"""
Tests for GameSession (guess submission, reset, derived queries).

Tests:
- Win and loss scenarios
- No-op handling for invalid, repeated and post-game guesses
- Reset / clear / category changes
- Listener notification
"""

import random

import pytest

from hangman.core.categories import BUILTIN_CATEGORIES, Category, get_category
from hangman.core.session import GameSession
from hangman.core.state import SessionEvent

LOSING_LETTERS = ["X", "Y", "Z", "Q", "W", "V", "K"]


class TestWinScenario:
    def test_cat(self, cat_session):
        """C, A, T reveals the word without losing a life."""
        s = cat_session
        assert s.masked_word() == "_ _ _"

        assert s.submit_guess("C") is SessionEvent.CORRECT_GUESS
        assert s.masked_word() == "C _ _"

        assert s.submit_guess("A") is SessionEvent.CORRECT_GUESS
        assert s.masked_word() == "C A _"

        assert s.submit_guess("T") is SessionEvent.GAME_WON
        assert s.masked_word() == "C A T"
        assert s.status == "won"
        assert s.is_won and s.is_over
        assert s.remaining_lives == 7

    def test_lowercase_input(self, cat_session):
        cat_session.submit_guess("c")
        assert cat_session.guessed_letters == {"C"}

    def test_mask_matches_word_when_won(self, cat_session):
        for letter in "TAC":
            cat_session.submit_guess(letter)
        assert cat_session.masked_word().replace(" ", "") == cat_session.target_word


class TestLossScenario:
    def test_dog(self, dog_session):
        """Seven distinct misses each cost one life; the seventh loses."""
        s = dog_session
        for i, letter in enumerate(LOSING_LETTERS, start=1):
            event = s.submit_guess(letter)
            assert s.remaining_lives == 7 - i
            if i < 7:
                assert event is SessionEvent.INCORRECT_GUESS
                assert s.status == "in_progress"
        assert event is SessionEvent.GAME_LOST
        assert s.remaining_lives == 0
        assert s.status == "lost"
        assert s.figure_stage == 7

    def test_incorrect_guesses_sorted(self, dog_session):
        for letter in ("Z", "O", "B"):
            dog_session.submit_guess(letter)
        assert dog_session.incorrect_guesses() == ["B", "Z"]

    def test_figure_stage_tracks_misses(self, dog_session):
        dog_session.submit_guess("X")
        dog_session.submit_guess("D")
        dog_session.submit_guess("Y")
        assert dog_session.figure_stage == 2


class TestIgnoredGuesses:
    def test_repeated_guess_is_idempotent(self, dog_session):
        assert dog_session.submit_guess("X") is SessionEvent.INCORRECT_GUESS
        assert dog_session.submit_guess("X") is None
        assert dog_session.submit_guess("x") is None
        assert dog_session.remaining_lives == 6
        assert dog_session.guessed_letters == {"X"}

    @pytest.mark.parametrize("bad", ["", "1", "?", "AB", " ", None, 5])
    def test_invalid_input(self, dog_session, bad):
        assert dog_session.submit_guess(bad) is None
        assert dog_session.guessed_letters == set()
        assert dog_session.remaining_lives == 7

    def test_frozen_after_win(self, cat_session):
        for letter in "CAT":
            cat_session.submit_guess(letter)
        before = (cat_session.guessed_letters, cat_session.remaining_lives, cat_session.status)
        for letter in "XYZB":
            assert cat_session.submit_guess(letter) is None
        assert (cat_session.guessed_letters, cat_session.remaining_lives, cat_session.status) == before

    def test_frozen_after_loss(self, dog_session):
        for letter in LOSING_LETTERS:
            dog_session.submit_guess(letter)
        assert dog_session.submit_guess("D") is None
        assert dog_session.status == "lost"
        assert "D" not in dog_session.guessed_letters

    def test_no_category(self):
        s = GameSession()
        assert s.submit_guess("A") is None
        assert not s.is_active
        assert not s.accepts_guesses
        assert s.masked_word() == ""
        assert s.incorrect_guesses() == []
        assert s.remaining_lives == 7
        assert s.status == "in_progress"


class TestLivesInvariant:
    def test_lives_never_negative_or_increasing(self):
        rng = random.Random(7)
        category = get_category("objects")
        s = GameSession(category, rng=random.Random(3))
        previous = s.remaining_lives
        for _ in range(200):
            s.submit_guess(rng.choice("ABCDEFGHIJKLMNOPQRSTUVWXYZ1!"))
            assert 0 <= s.remaining_lives <= previous
            previous = s.remaining_lives
        assert s.is_over


class TestReset:
    def test_reset_mid_game(self):
        animals = get_category("animals")
        s = GameSession(animals, rng=random.Random(42))
        s.submit_guess("E")
        s.submit_guess("Q")
        s.reset()
        assert s.guessed_letters == set()
        assert s.remaining_lives == 7
        assert s.status == "in_progress"
        assert s.target_word in animals.words
        assert s.category is animals

    def test_reset_after_loss(self, dog_session):
        for letter in LOSING_LETTERS:
            dog_session.submit_guess(letter)
        dog_session.reset()
        assert dog_session.accepts_guesses
        assert dog_session.target_word == "DOG"

    def test_seeded_rng_is_deterministic(self):
        actions = get_category("actions")
        a = GameSession(actions, rng=random.Random(99))
        b = GameSession(actions, rng=random.Random(99))
        assert a.target_word == b.target_word

    def test_reset_without_category_clears(self):
        s = GameSession()
        s.reset()
        assert not s.is_active

    def test_reset_with_new_category(self, cat_session):
        other = Category(key="birds", label="Birds", words=("OWL",))
        cat_session.reset(other)
        assert cat_session.target_word == "OWL"
        assert cat_session.category is other

    def test_clear(self, cat_session):
        cat_session.submit_guess("X")
        cat_session.clear()
        assert cat_session.category is None
        assert cat_session.target_word == ""
        assert cat_session.guessed_letters == set()
        assert cat_session.remaining_lives == 7


class TestChangeCategory:
    def test_same_category_is_noop(self):
        animals = get_category("animals")
        s = GameSession(animals, rng=random.Random(1))
        s.submit_guess("A")
        assert s.change_category(animals) is False
        assert s.guessed_letters == {"A"}

    def test_different_category_restarts(self):
        s = GameSession(BUILTIN_CATEGORIES[0], rng=random.Random(1))
        s.submit_guess("A")
        assert s.change_category(BUILTIN_CATEGORIES[1]) is True
        assert s.guessed_letters == set()
        assert s.target_word in BUILTIN_CATEGORIES[1].words

    def test_none_clears(self, cat_session):
        assert cat_session.change_category(None) is True
        assert not cat_session.is_active
        assert cat_session.change_category(None) is False


class TestListener:
    def test_receives_events(self, events):
        s = GameSession(Category(key="t", label="T", words=("OX",)), listener=events)
        s.submit_guess("O")
        s.submit_guess("O")
        s.submit_guess("Z")
        s.submit_guess("X")
        assert events.seen == [
            SessionEvent.CORRECT_GUESS,
            SessionEvent.INCORRECT_GUESS,
            SessionEvent.GAME_WON,
        ]

    def test_listener_failure_does_not_affect_state(self):
        def broken(event):
            raise RuntimeError("speaker unplugged")

        s = GameSession(Category(key="t", label="T", words=("OX",)), listener=broken)
        assert s.submit_guess("Z") is SessionEvent.INCORRECT_GUESS
        assert s.remaining_lives == 6

    def test_rejects_zero_lives(self):
        with pytest.raises(ValueError):
            GameSession(max_lives=0)
