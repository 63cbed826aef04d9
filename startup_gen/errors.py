"""
Error taxonomy and process exit codes for the startup generator.
"""

from __future__ import annotations
import enum


class ExitCode(enum.IntEnum):
    OK = 0
    NO_INPUT = 1        # no header file named on the command line
    NO_FILE = 2         # input missing/unreadable or output not creatable
    BAD_FORMAT = 3      # header format error (only fatal with --strict)
    BAD_OPTION = 4      # invalid option or option argument


class StartupGenError(Exception):
    """Base class for all startup generator errors."""


class SlotRangeError(StartupGenError, ValueError):
    def __init__(self, irqn: int):
        self.irqn = irqn
        super().__init__(f"IRQ number {irqn} outside supported range")


class OptionError(StartupGenError):
    pass


class HeaderFormatError(StartupGenError):
    def __init__(self, message: str, line: int, text: str):
        self.line = line
        self.text = text
        super().__init__(f"Header format error at L{line}: {message}: {text.strip()}")
