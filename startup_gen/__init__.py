"""
h2cstartup — Cortex-M C startup module generator
=================================================
Builds the startup module of a Cortex-M microcontroller (reset handler,
default exception handler, weak handler declarations and the vector table)
from the IRQn enumeration of the vendor's MCU header file.

Architecture:
    ┌──────────┐    ┌──────────┐    ┌────────────┐    ┌───────────┐
    │ MCU .h   │───>│ Scanner  │───>│  Resolver  │───>│  CodeGen  │───> startup_<mcu>.c
    │ (IRQn)   │    │(SlotTable│    │(vector cnt │    │ (C text)  │
    └──────────┘    │ max IRQn)│    │  policy)   │    └───────────┘
                    └──────────┘    └────────────┘

    - slots.py:    Slot value type (IRQn with range check) and SlotTable
    - scanner.py:  three-state line scanner over the IRQn_Type enum
    - resolver.py: GeneratorOptions and the vector count policy
    - codegen.py:  handler declarations + vector table emitter
"""

__version__ = "1.0.0"

from typing import Iterable, Union

from .errors import (ExitCode, HeaderFormatError, OptionError, SlotRangeError,
                     StartupGenError)
from .slots import Slot, SlotTable
from .scanner import (CMSIS_CONVENTION, HeaderConvention, HeaderScanner,
                      ScanResult, ScanState, scan_header)
from .resolver import GeneratorOptions, ResolvedTable, resolve
from .codegen import STD_CORE_NAMES, StartupGenerator, placeholder_name


def generate_startup(source: Union[str, Iterable[str]], *,
                     options: GeneratorOptions = GeneratorOptions(),
                     output_name: str = "startup.c",
                     input_name: str = "mcu.h",
                     convention: HeaderConvention = CMSIS_CONVENTION) -> str:
    """Generate the C startup module for an MCU header.

    Full pipeline: HeaderScanner -> resolve -> StartupGenerator.

    Args:
        source: header text, or an iterable of its lines.
        options: vector count and naming policy.
        output_name: file name quoted in the generated heading.
        input_name: header name quoted in the generated heading.
        convention: header naming convention (defaults to CMSIS).

    Returns:
        C source text.
    """
    scan = scan_header(source, convention)
    resolved = resolve(scan, options)
    gen = StartupGenerator(output_name=output_name, input_name=input_name)
    return gen.generate(resolved)
