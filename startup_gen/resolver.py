"""
Vector count policy: reconcile the number of NVIC vectors the MCU header
declares with the number the user asked for.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

from .errors import OptionError
from .scanner import ScanResult
from .slots import MAX_NVIC_VECTORS, Slot, SlotTable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeneratorOptions:
    emit_unused: bool = False           # -i: placeholder names for unused NVIC slots
    short_core_names: bool = False      # -s: NMI_, MemManage_, SVC_, DebugMon_
    requested_vectors: Optional[int] = None   # -n: NVIC table size

    def __post_init__(self):
        n = self.requested_vectors
        if n is not None and not 0 <= n <= MAX_NVIC_VECTORS:
            raise OptionError(
                f"requested vector count {n} out of range 0..{MAX_NVIC_VECTORS}")


@dataclass(frozen=True)
class ResolvedTable:
    table: SlotTable
    options: GeneratorOptions
    max_seen: int
    mcu_vectors: int
    requested_vectors: Optional[int]
    effective_max: int

    @property
    def effective_vector_count(self) -> int:
        return max(self.effective_max + 1, 0)

    def core_entries(self) -> Iterator[Tuple[Slot, str]]:
        """Named core exception slots. Never bounded by the vector count."""
        return self.table.core_items()

    def nvic_slots(self) -> Iterator[Slot]:
        """All NVIC slots inside the bound, named or not."""
        for irqn in range(self.effective_max + 1):
            yield Slot(irqn)


def resolve(scan: ScanResult, options: GeneratorOptions) -> ResolvedTable:
    """Apply the vector count policy to a scan result."""
    mcu_vectors = max(scan.max_seen + 1, 0)
    requested = options.requested_vectors

    # no point declaring vectors past the MCU's range unless they get names
    if requested is not None and requested > mcu_vectors and not options.emit_unused:
        logger.info("requested %d NVIC vectors, MCU defines %d; clamping",
                    requested, mcu_vectors)
        requested = mcu_vectors

    effective_max = requested - 1 if requested is not None else scan.max_seen
    effective_max = max(effective_max, -1)

    logger.debug("MCU vectors %d, requested %s, last emitted IRQn %d",
                 mcu_vectors, requested, effective_max)
    return ResolvedTable(
        table=scan.table.copy(),
        options=options,
        max_seen=scan.max_seen,
        mcu_vectors=mcu_vectors,
        requested_vectors=requested,
        effective_max=effective_max,
    )
