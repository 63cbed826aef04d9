"""
C startup module generator.

Turns a ResolvedTable into a gcc-arm compatible C source file containing:
  - Reset_Handler: copies .data from Flash, zeroes .bss, calls SystemInit,
    __libc_init_array and main
  - Default_Handler: empty endless loop used by every unhandled exception
  - one weak handler declaration per named (or placeholder) vector, aliased
    to Default_Handler
  - the vector table g_pfnvectors, placed in section .isr_vector

Vector table layout:
  - Initial_SP:        &_estack
  - Core_Exceptions:   15 entries for vector positions 1..15, filled with
                       designated initializers CX(n) so that missing core
                       exceptions stay NULL
  - NVIC_Interrupts:   [IRQn] = handler for IRQn 0..last
"""

from __future__ import annotations
import logging
from typing import Dict, List, Optional

from .resolver import ResolvedTable
from .slots import LAST_CORE_IRQN, Slot

logger = logging.getLogger(__name__)


GENERATOR_NAME = "h2cstartup"

HANDLER_SUFFIX = "Handler"
DEFAULT_HANDLER = "Default_Handler"
PROTO_WIDTH = 48

# Standard short names, keyed by IRQn.  HardFault, BusFault, UsageFault,
# PendSV and SysTick have no short form.
STD_CORE_NAMES: Dict[int, str] = {
    -14: "NMI_",
    -12: "MemManage_",
    -5: "SVC_",
    -4: "DebugMon_",
}


STARTUP_BODY = """\
// the names below represent memory addresses, not real variables
extern int
   _sdata,  // start of .data section
   _edata,  // end of data section
   _sidata, // start of .data section image in Flash
   _sbss,   // start of .bss section
   _ebss,   // end of .bss section
   _estack; // bottom of stack location

// external functions called during startup
void SystemInit(void);
void __libc_init_array(void);
int main(void);

// code executed after core reset
__attribute__ ((naked, noreturn)) void Reset_Handler(void)
{
   SystemInit();
   // initialize .data section values from Flash
   for (int *dptr = &_sdata, *sptr = &_sidata; dptr < &_edata;)
       *dptr++ = *sptr++;
   // zero the .bss section
   for (int *dptr = &_sbss; dptr < &_ebss; dptr++)
       *dptr = 0;
   __libc_init_array();
   main();
   for (;;);
}

// the default empty handler for exceptions not handled by user
static void Default_Handler(void)
{
    for (;;);
}
"""

OVERRIDE_NOTE = (
    "// weak defaults; define a function with the same name to handle an exception"
)

VECTOR_TABLE_START = """\
struct vectable_ {
    void *Initial_SP;
    void (*Core_Exceptions[15])(void);
    void (*NVIC_Interrupts[])(void);
};

#define CX(a) [(a) - 1]

const struct vectable_ g_pfnvectors __attribute__((section(".isr_vector"))) = {
    .Initial_SP = &_estack,
    .Core_Exceptions = {
        CX( 1) = Reset_Handler,"""

VECTOR_TABLE_MID = """\
    },
    .NVIC_Interrupts = {"""

VECTOR_TABLE_END = """\
    }
};"""


def placeholder_name(irqn: int) -> str:
    """Handler base name for an NVIC slot the header leaves unnamed."""
    return f"IRQ{irqn}_IRQ"


class StartupGenerator:
    """Generates the C startup module from a resolved slot table."""

    def __init__(self, output_name: str = "startup.c", input_name: str = "mcu.h"):
        self.output_name = output_name
        self.input_name = input_name

        # Output sections
        self._header_lines: List[str] = []
        self._proto_lines: List[str] = []
        self._vector_lines: List[str] = []

    # ── Output helpers ────────────────────────

    def _emit_proto(self, base: str):
        proto = f"void {base}{HANDLER_SUFFIX}(void)"
        self._proto_lines.append(
            f'{proto:<{PROTO_WIDTH}}__attribute__ ((weak, alias("{DEFAULT_HANDLER}")));')

    def _emit_vector(self, line: str):
        self._vector_lines.append(f"        {line}")

    # ── Naming ────────────────────────────────

    @staticmethod
    def core_name(resolved: ResolvedTable, slot: Slot, name: str) -> str:
        if resolved.options.short_core_names:
            return STD_CORE_NAMES.get(slot.irqn, name)
        return name

    @staticmethod
    def nvic_name(resolved: ResolvedTable, slot: Slot) -> Optional[str]:
        name = resolved.table.get(slot)
        if name is None and resolved.options.emit_unused:
            return placeholder_name(slot.irqn)
        return name

    # ── Main generation entry point ───────────

    def generate(self, resolved: ResolvedTable) -> str:
        """Generate the complete C source text."""
        self._header_lines = []
        self._proto_lines = []
        self._vector_lines = []

        self._gen_heading(resolved)
        self._gen_prototypes(resolved)
        self._gen_vector_table(resolved)

        logger.debug("generated %d handler declarations, %d vector entries",
                     len(self._proto_lines), len(self._vector_lines))
        return self._assemble_output()

    def _gen_heading(self, resolved: ResolvedTable):
        opts = resolved.options
        self._header_lines = [
            "/*",
            f"    {self.output_name}",
            f"    gcc-arm compatible C startup module generated by {GENERATOR_NAME}"
            f" from {self.input_name}",
            "",
        ]
        if opts.short_core_names:
            self._header_lines.append("    Standard short core exception names.")
        if (resolved.requested_vectors is not None
                and resolved.requested_vectors != resolved.mcu_vectors):
            self._header_lines.append(
                f"    {resolved.requested_vectors} NVIC IRQ vectors"
                f" (MCU defines {resolved.mcu_vectors}).")
        if opts.emit_unused:
            self._header_lines.append("    Unused vector names defined.")
        self._header_lines.append("*/")

    def _gen_prototypes(self, resolved: ResolvedTable):
        for slot, name in resolved.core_entries():
            self._emit_proto(self.core_name(resolved, slot, name))
        for slot in resolved.nvic_slots():
            name = self.nvic_name(resolved, slot)
            if name is not None:
                self._emit_proto(name)

    def _gen_vector_table(self, resolved: ResolvedTable):
        for slot, name in resolved.core_entries():
            sep = "," if slot.irqn < LAST_CORE_IRQN else ""
            self._emit_vector(
                f"CX({slot.index:2d}) = {self.core_name(resolved, slot, name)}{HANDLER_SUFFIX}{sep}")

        self._vector_lines.append(VECTOR_TABLE_MID)

        last = resolved.effective_max
        width = 3 if last > 99 else 2
        for slot in resolved.nvic_slots():
            name = self.nvic_name(resolved, slot)
            if name is None:
                continue
            sep = "," if slot.irqn < last else ""
            self._emit_vector(f"[{slot.irqn:{width}d}] = {name}{HANDLER_SUFFIX}{sep}")

    def _assemble_output(self) -> str:
        sections: List[str] = []
        sections.extend(self._header_lines)
        sections.append("")
        sections.append(STARTUP_BODY)
        if self._proto_lines:
            sections.append(OVERRIDE_NOTE)
            sections.extend(self._proto_lines)
        sections.append("")
        sections.append(VECTOR_TABLE_START)
        sections.extend(self._vector_lines)
        sections.append(VECTOR_TABLE_END)
        return "\n".join(sections) + "\n"
