"""
Shared color definitions for terminal output.
"""


class Colors:
    RESET = "\x1b[0m"
    GREEN = "\x1b[38;2;76;175;80m"
    RED = "\x1b[38;2;244;67;54m"
    ORANGE = "\x1b[38;2;255;152;0m"
