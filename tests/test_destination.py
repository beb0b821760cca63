"""
Tests for destination folder selection.
"""

import pytest

from autosaver.errors import DestinationError
from autosaver.ui import acquire_destination


def picker(*folders):
    """choose_folder stand-in returning folders in order, then None."""
    remaining = list(folders)
    calls = []

    def choose():
        calls.append(True)
        return remaining.pop(0) if remaining else None

    choose.calls = calls
    return choose


def answers(*replies):
    """confirm stand-in returning replies in order."""
    remaining = list(replies)
    questions = []

    def confirm(question):
        questions.append(question)
        return remaining.pop(0)

    confirm.questions = questions
    return confirm


class TestAcquireDestination:
    """Tests for acquire_destination()."""

    def test_existing_marker_used_without_asking(self, temp_dir):
        (temp_dir / "latest.txt").write_text("g1.json")
        choose, confirm = picker(), answers()
        assert acquire_destination(temp_dir, choose, confirm) == temp_dir
        assert choose.calls == []
        assert confirm.questions == []

    def test_new_folder_confirmed(self, temp_dir):
        confirm = answers(True)
        assert acquire_destination(temp_dir, picker(), confirm) == temp_dir
        assert "latest.txt" in confirm.questions[0]

    def test_declined_asks_for_another(self, temp_dir):
        other = temp_dir / "other"
        other.mkdir()
        (other / "latest.txt").write_text("")
        choose = picker(other)
        assert acquire_destination(temp_dir, choose, answers(False)) == other
        assert len(choose.calls) == 1

    def test_unwritable_folder_reported(self, temp_dir, notifier):
        choose = picker(temp_dir)
        result = acquire_destination(temp_dir / "missing", choose, answers(True), notifier)
        assert result == temp_dir
        assert notifier.by_severity("error")[0].startswith("Could not access")

    def test_no_initial_folder_asks(self, temp_dir):
        assert acquire_destination(None, picker(temp_dir), answers(True)) == temp_dir

    def test_cancelled(self, temp_dir):
        with pytest.raises(DestinationError):
            acquire_destination(None, picker(), answers())

    def test_gives_up_after_max_attempts(self, temp_dir):
        choose = picker(temp_dir, temp_dir, temp_dir, temp_dir)
        confirm = answers(False, False, False, False)
        with pytest.raises(DestinationError):
            acquire_destination(temp_dir, choose, confirm, max_attempts=3)
        assert len(confirm.questions) == 3
        assert len(choose.calls) == 2
