#!/usr/bin/env python3
"""
h2cstartup — generate a Cortex-M C startup module from an MCU header

Usage:
    python h2cstartup.py [-i] [-n <irqn>] [-s] <mcuname>.h [-o output.c] [--verbose]

Produces startup_<mcuname>.c containing the complete startup module with
properly named exception vectors, taken from the IRQn_Type enumeration of the
MCU resource definition header.

Examples:
    python h2cstartup.py stm32f401xc.h             # -> startup_stm32f401xc.c
    python h2cstartup.py -s -n 86 stm32f401xc.h    # short core names, 86 NVIC vectors
    python h2cstartup.py -i -n 96 stm32g071xx.h    # name unused vectors up to IRQ95
    python h2cstartup.py --dump-table stm32f401xc.h
"""

import argparse
import logging
import os
import sys
from pathlib import PureWindowsPath
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler

# Allow running from project root or as module
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from startup_gen import __version__
from startup_gen.codegen import StartupGenerator
from startup_gen.errors import ExitCode, OptionError
from startup_gen.resolver import GeneratorOptions, ResolvedTable, resolve
from startup_gen.scanner import scan_header

OUTPUT_PREFIX = "startup_"
OUTPUT_SUFFIX = ".c"

log = logging.getLogger("h2cstartup")


def setup_logging(console_level: int = logging.WARNING) -> logging.Logger:
    """Attach a stderr RichHandler to the CLI and library loggers."""
    for name in ("h2cstartup", "startup_gen"):
        logger = logging.getLogger(name)
        logger.setLevel(console_level)
        if logger.handlers:
            continue
        ch = RichHandler(
            console=Console(stderr=True),
            show_time=False,
            show_path=False,
            markup=False,
            rich_tracebacks=True,
        )
        ch.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(ch)
    return log


class OptionParser(argparse.ArgumentParser):
    """ArgumentParser that reports option errors with ExitCode.BAD_OPTION."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(ExitCode.BAD_OPTION, f"{self.prog}: error: {message}\n")


def build_parser() -> OptionParser:
    parser = OptionParser(
        prog="h2cstartup",
        description="Generate the C startup module of a Cortex-M MCU from its header file",
        epilog="Produces startup_<mcuname>.c with properly named exception vectors.",
    )
    parser.add_argument("input", nargs="?", help="MCU header file (<mcuname>.h)")
    parser.add_argument("-i", dest="emit_unused", action="store_true",
                        help="define names for unused NVIC interrupts")
    parser.add_argument("-n", dest="vectors", type=int, metavar="IRQN",
                        help="define table with IRQN IRQ vectors up to IRQN-1")
    parser.add_argument("-s", dest="short_names", action="store_true",
                        help="use short standard names for core exception handlers")
    parser.add_argument("-o", "--output",
                        help="output file (default: startup_<mcuname>.c in the current directory)")
    parser.add_argument("--strict", action="store_true",
                        help="fail on IRQn lines with out of range numbers")
    parser.add_argument("--dump-table", action="store_true",
                        help="print the resolved vector table and exit (debug)")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="print generation details to stderr")
    parser.add_argument("--version", action="version",
                        version=f"h2cstartup {__version__}")
    return parser


def base_name(path: str) -> str:
    """File name part of a path written with either / or \\ separators."""
    return PureWindowsPath(path).name


def output_name_for(input_path: str) -> str:
    """startup_<basename>.c for <dir>/<basename>.h"""
    return OUTPUT_PREFIX + PureWindowsPath(input_path).with_suffix(OUTPUT_SUFFIX).name


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    parser = build_parser()
    if not argv:
        parser.print_help()
        return ExitCode.OK

    args = parser.parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    try:
        options = GeneratorOptions(
            emit_unused=args.emit_unused,
            short_core_names=args.short_names,
            requested_vectors=args.vectors,
        )
    except OptionError as e:
        parser.error(str(e))

    if args.input is None:
        log.error("file not specified")
        return ExitCode.NO_INPUT

    # Read input
    try:
        with open(args.input, "r", encoding="utf-8", errors="replace") as f:
            source = f.read()
    except FileNotFoundError:
        log.error("%s file not found", args.input)
        return ExitCode.NO_FILE
    except OSError as e:
        log.error("error reading %s: %s", args.input, e)
        return ExitCode.NO_FILE

    input_name = base_name(args.input)
    output_path = args.output or output_name_for(args.input)
    log.debug("input:  %s", args.input)
    log.debug("output: %s", output_path)

    scan = scan_header(source)
    if not scan.found_marker:
        log.warning("no IRQn enumeration found in %s", input_name)
    if scan.errors and args.strict:
        log.error("%d format error(s) in %s", len(scan.errors), input_name)
        return ExitCode.BAD_FORMAT

    resolved = resolve(scan, options)
    log.debug("MCU defines %d NVIC vectors, generating %d",
              resolved.mcu_vectors, resolved.effective_vector_count)

    if args.dump_table:
        _print_table(resolved)
        return ExitCode.OK

    gen = StartupGenerator(output_name=output_path, input_name=input_name)
    result = gen.generate(resolved)

    # Write output
    try:
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(result)
    except OSError as e:
        log.error("cannot create file %s: %s", output_path, e)
        return ExitCode.NO_FILE

    log.debug("generated %d lines", result.count("\n"))
    return ExitCode.OK


def _print_table(resolved: ResolvedTable):
    """Print the resolved vector table (debug helper)."""
    print(f"MCU vectors: {resolved.mcu_vectors}")
    print(f"Emitted NVIC vectors: {resolved.effective_vector_count}")
    for slot, name in resolved.core_entries():
        print(f"  {slot.irqn:4d}  {StartupGenerator.core_name(resolved, slot, name)}Handler")
    for slot in resolved.nvic_slots():
        name = StartupGenerator.nvic_name(resolved, slot)
        if name is not None:
            print(f"  {slot.irqn:4d}  {name}Handler")


if __name__ == "__main__":
    sys.exit(main())
