"""
Slot model for the Cortex-M vector table.

A slot is identified by its interrupt number (IRQn).  Core exceptions use
negative numbers (-14..-1), NVIC interrupts use 0..495.  Adding 16 gives the
zero-based position in the vector table, where positions 0 and 1 hold the
initial stack pointer and the reset vector:

    index:   0    1     2 .. 15            16 .. 511
    irqn:  -16  -15   -14 .. -1             0 .. 495
           SP   Reset  core exceptions     NVIC interrupts
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Iterator, Optional, Tuple

from .errors import SlotRangeError


SLOT_OFFSET = 16
MIN_IRQN = -16
MAX_NVIC_VECTORS = 496
MAX_IRQN = MAX_NVIC_VECTORS - 1

# Core exception slots that may appear in the generated tables
FIRST_CORE_IRQN = -14
LAST_CORE_IRQN = -1


@dataclass(frozen=True, order=True)
class Slot:
    irqn: int

    def __post_init__(self):
        if not MIN_IRQN <= self.irqn <= MAX_IRQN:
            raise SlotRangeError(self.irqn)

    @property
    def index(self) -> int:
        """Zero-based position in the vector table."""
        return self.irqn + SLOT_OFFSET

    @property
    def is_core(self) -> bool:
        return FIRST_CORE_IRQN <= self.irqn <= LAST_CORE_IRQN

    def __str__(self):
        return f"IRQn {self.irqn} (slot {self.index})"


class SlotTable:
    """Mapping of Slot -> canonical handler base name.

    Iteration always runs in ascending slot order so that everything built
    from the table is reproducible.
    """

    def __init__(self, entries: Optional[Dict[Slot, str]] = None):
        self._names: Dict[Slot, str] = {}
        for slot, name in (entries or {}).items():
            self.set(slot, name)

    def set(self, slot: Slot, name: str):
        if not name:
            raise ValueError(f"empty handler name for {slot}")
        self._names[slot] = name

    def get(self, slot: Slot) -> Optional[str]:
        return self._names.get(slot)

    def core_items(self) -> Iterator[Tuple[Slot, str]]:
        return ((s, n) for s, n in self.items() if s.is_core)

    def items(self) -> Iterator[Tuple[Slot, str]]:
        for slot in sorted(self._names):
            yield slot, self._names[slot]

    def copy(self) -> SlotTable:
        return SlotTable(dict(self._names))

    def __len__(self):
        return len(self._names)

    def __eq__(self, other):
        if not isinstance(other, SlotTable):
            return NotImplemented
        return self._names == other._names

    def __repr__(self):
        body = ", ".join(f"{s.irqn}: {n!r}" for s, n in self.items())
        return f"SlotTable({{{body}}})"
