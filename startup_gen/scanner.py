"""
Header scanner for the startup generator.

Reads the interrupt number enumeration of a vendor MCU header (CMSIS
``IRQn_Type``) and builds a SlotTable of canonical handler base names.

The scanner is a three-state machine:

    SEEKING  ──(line contains marker)──>  SCANNING  ──(unmatched line with '}')──>  DONE

Only lines of the form ``<identifier> = <signed integer>`` are understood
inside the enumeration; anything after the integer (comma, comment) is
ignored.  Unrecognised lines (comments, blank lines, #if blocks) are skipped.
"""

from __future__ import annotations
import enum
import logging
import re
from dataclasses import dataclass
from typing import Iterable, List, Tuple, Union

from .errors import HeaderFormatError, SlotRangeError
from .slots import MAX_NVIC_VECTORS, Slot, SlotTable

logger = logging.getLogger(__name__)


# ──────────────────────────────────────────────
# Naming convention
# ──────────────────────────────────────────────

@dataclass(frozen=True)
class HeaderConvention:
    """How interrupt names are spelled in the vendor header.

    The suffix lengths turn enumerator names into handler base names:
    ``WWDG_IRQn`` (>= 0) loses one character -> ``WWDG_IRQ``, and
    ``NonMaskableInt_IRQn`` (< 0) loses four -> ``NonMaskableInt_``.
    """
    marker: str = "_IRQn"
    positive_strip: int = 1
    negative_strip: int = 4
    close_token: str = "}"

    def handler_base(self, identifier: str, irqn: int) -> str:
        strip = self.positive_strip if irqn >= 0 else self.negative_strip
        return identifier[:-strip] if strip else identifier


CMSIS_CONVENTION = HeaderConvention()

ENUM_LINE_RE = re.compile(r'\s*([A-Za-z_]\w*)\s*=\s*([+-]?\d+)')

NO_IRQN_SEEN = -15


class ScanState(enum.Enum):
    SEEKING = "seeking"
    SCANNING = "scanning"
    DONE = "done"


@dataclass(frozen=True)
class ScanResult:
    table: SlotTable
    max_seen: int = NO_IRQN_SEEN
    errors: Tuple[HeaderFormatError, ...] = ()
    found_marker: bool = False
    lines_scanned: int = 0


# ──────────────────────────────────────────────
# Scanner
# ──────────────────────────────────────────────

class HeaderScanner:
    """Scans header lines into a SlotTable."""

    def __init__(self, convention: HeaderConvention = CMSIS_CONVENTION):
        self.convention = convention
        self.state = ScanState.SEEKING
        self.table = SlotTable()
        self.max_seen = NO_IRQN_SEEN
        self.errors: List[HeaderFormatError] = []
        self._lineno = 0

    def scan(self, lines: Iterable[str]) -> ScanResult:
        """Scan ``lines`` and return the collected table."""
        self.state = ScanState.SEEKING
        self.table = SlotTable()
        self.max_seen = NO_IRQN_SEEN
        self.errors = []
        self._lineno = 0

        for line in lines:
            self._lineno += 1
            if self.state is ScanState.SEEKING:
                self._seek(line)
            if self.state is ScanState.SCANNING:
                self._scan_line(line)
            if self.state is ScanState.DONE:
                break

        logger.debug("scan stopped in state %s after %d lines, max IRQn %d, %d entries",
                     self.state.value, self._lineno, self.max_seen, len(self.table))
        return ScanResult(
            table=self.table,
            max_seen=self.max_seen,
            errors=tuple(self.errors),
            found_marker=self.state is not ScanState.SEEKING,
            lines_scanned=self._lineno,
        )

    # ── State handlers ────────────────────────

    def _seek(self, line: str):
        if self.convention.marker in line:
            logger.debug("IRQn enumeration starts at L%d", self._lineno)
            self.state = ScanState.SCANNING

    def _scan_line(self, line: str):
        m = ENUM_LINE_RE.match(line)
        if not m:
            if self.convention.close_token in line:
                logger.debug("IRQn enumeration ends at L%d", self._lineno)
                self.state = ScanState.DONE
            return

        identifier, irqn = m.group(1), int(m.group(2))
        if irqn >= MAX_NVIC_VECTORS:
            return
        self.max_seen = max(self.max_seen, irqn)

        name = self.convention.handler_base(identifier, irqn)
        if not name:
            self._report("name too short for handler", line)
            return
        try:
            slot = Slot(irqn)
        except SlotRangeError as e:
            self._report(str(e), line)
            return
        self.table.set(slot, name)

    def _report(self, message: str, line: str):
        err = HeaderFormatError(message, self._lineno, line)
        logger.error("%s", err)
        self.errors.append(err)


def scan_header(source: Union[str, Iterable[str]],
                convention: HeaderConvention = CMSIS_CONVENTION) -> ScanResult:
    """Scan header text (a string or an iterable of lines)."""
    lines = source.splitlines() if isinstance(source, str) else source
    return HeaderScanner(convention).scan(lines)
