"""
Tests for console progress output.
"""

import io

from autosaver.ui import Colors, ConsoleNotifier


class TestConsoleNotifier:
    """Tests for ConsoleNotifier."""

    def test_plain_output(self):
        stream = io.StringIO()
        ConsoleNotifier(stream=stream).notify("Done.", "ok")
        assert stream.getvalue() == "  Done.\n"

    def test_colored_by_severity(self):
        notifier = ConsoleNotifier(stream=io.StringIO(), color=True)
        assert notifier.format("Done.", "ok") == f"  {Colors.GREEN}Done.{Colors.RESET}"
        assert notifier.format("Oops", "error") == f"  {Colors.RED}Oops{Colors.RESET}"
        assert notifier.format("Skip", "alert") == f"  {Colors.ORANGE}Skip{Colors.RESET}"

    def test_info_uncolored(self):
        notifier = ConsoleNotifier(stream=io.StringIO(), color=True)
        assert notifier.format("Fetching games...") == "  Fetching games..."

    def test_unknown_severity_is_info(self):
        notifier = ConsoleNotifier(stream=io.StringIO(), color=True)
        assert notifier.format("hello", "debug") == "  hello"
