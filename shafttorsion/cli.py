"""Line-oriented driver: collect N sections, solve, print the report.

Input is read as whitespace separated tokens, so values may be typed one per
prompt or several on a line (or piped from a file).
"""
from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Iterator, List, Optional, TextIO

from . import __version__
from .core.constants import DEFAULT_SAMPLES, ENV_DEV, SHAPE_LABELS, Shape
from .core.export_results import ResultExportError, export_results_bundle_zip, write_diag_results_csv
from .core.model import DegenerateGeometryError, InvalidShapeError, MalformedInputError, Section, Shaft, parse_shape
from .core.project_io import ShaftFileError, load_shaft_json, save_shaft_json
from .core.report_export import build_text_report, export_standard_report_html
from .core.torsion import TorsionSolverError, solve_shaft
from .logging_config import setup_logging

logger = logging.getLogger(__name__)

INVALID_SHAPE_MESSAGE = "Incorrect data entry"


class TokenReader:
    def __init__(self, stream: TextIO, out: Optional[TextIO] = None):
        self._tokens = self._iter_tokens(stream)
        self._out = out

    @staticmethod
    def _iter_tokens(stream: TextIO) -> Iterator[str]:
        for line in stream:
            yield from line.split()

    def prompt(self, text: str) -> None:
        if self._out is not None:
            self._out.write(text)
            self._out.flush()

    def read_word(self, prompt: str = "") -> str:
        self.prompt(prompt)
        try:
            return next(self._tokens)
        except StopIteration:
            raise MalformedInputError("unexpected end of input") from None

    def read_float(self, prompt: str = "") -> float:
        tok = self.read_word(prompt)
        try:
            return float(tok)
        except ValueError:
            raise MalformedInputError(f"expected a number, got {tok!r}") from None

    def read_int(self, prompt: str = "") -> int:
        tok = self.read_word(prompt)
        try:
            return int(tok)
        except ValueError:
            raise MalformedInputError(f"expected an integer, got {tok!r}") from None


def read_section(reader: TokenReader, index: int) -> Section:
    reader.prompt(f"\n--- Section #{index} ---\n")
    shape = parse_shape(reader.read_word(f"Enter shape ({', '.join(SHAPE_LABELS)}): "))

    geo = {}
    if shape is Shape.CIRCLE:
        geo["diameter_cm"] = reader.read_float("Enter diameter d (cm): ")
    elif shape is Shape.RECTANGLE:
        geo["small_side_cm"] = reader.read_float("Enter small side b (cm): ")
        geo["aspect_ratio"] = reader.read_float("Enter ratio h/b: ")
    elif shape is Shape.TUBE:
        geo["outer_diameter_cm"] = reader.read_float("Enter outer diameter D (cm): ")
        geo["diameter_ratio"] = reader.read_float("Enter ratio d/D: ")

    length = reader.read_float("Enter length L (m): ")
    shear_modulus = reader.read_float("Enter shear modulus G (Pa): ")
    start_moment = reader.read_float("Enter start moment M0 (N·m): ")
    end_moment = reader.read_float("Enter end moment M_L (N·m) (use negative for 'from yourself'): ")

    return Section.from_user_input(
        shape,
        length=length,
        shear_modulus=shear_modulus,
        start_moment=start_moment,
        end_moment=end_moment,
        **geo,
    )


def collect_sections(reader: TokenReader) -> Shaft:
    """Read every section before anything is solved or reported."""
    n = reader.read_int("Enter number of sections: ")
    if n < 0:
        raise MalformedInputError(f"number of sections must be >= 0, got {n}")
    sections: List[Section] = [read_section(reader, i) for i in range(1, n + 1)]
    return Shaft(sections=tuple(sections))


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="shafttorsion",
        description="Torsion of a stepped shaft: J, W, end moment and twist angle per section.",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("-i", "--input", metavar="JSON", help="read sections from a shaft file instead of prompting")
    p.add_argument("--save", metavar="JSON", help="write the collected sections to a shaft file")
    p.add_argument("--html", metavar="PATH", help="write an HTML report")
    p.add_argument("--csv", metavar="PATH", help="write sampled torque / shear stress diagrams")
    p.add_argument("--bundle", metavar="ZIP", help="write a zip with every artifact")
    p.add_argument("--samples", type=int, default=DEFAULT_SAMPLES, help="diagram samples per section (default %(default)s)")
    p.add_argument("-q", "--quiet", action="store_true", help="do not print prompts")
    p.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING (default: $SHAFTTORSION_LOG_LEVEL or WARNING)")
    p.add_argument("--log-file", default=None, help="also write the log to this file")
    return p


def _fail(stderr: TextIO, message: str) -> int:
    # the user-facing line goes to stderr once; the log only keeps a debug trace
    if os.environ.get(ENV_DEV) == "1":
        logger.exception(message)
    else:
        logger.debug(message)
    print(message, file=stderr)
    return 1


def main(argv: Optional[List[str]] = None, stdin: Optional[TextIO] = None,
         stdout: Optional[TextIO] = None, stderr: Optional[TextIO] = None) -> int:
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout
    stderr = stderr if stderr is not None else sys.stderr

    args = build_parser().parse_args(argv)
    setup_logging(args.log_level, args.log_file)

    try:
        if args.input:
            shaft = load_shaft_json(args.input)
        else:
            reader = TokenReader(stdin, out=None if args.quiet else stdout)
            reader.prompt("=== Shaft Torsion Calculator ===\n")
            shaft = collect_sections(reader)
        if args.save:
            save_shaft_json(shaft, args.save)
        results = solve_shaft(shaft, n_samples=args.samples)
    except InvalidShapeError as exc:
        logger.debug("%s", exc)
        return _fail(stderr, INVALID_SHAPE_MESSAGE)
    except (MalformedInputError, DegenerateGeometryError, ShaftFileError, TorsionSolverError) as exc:
        return _fail(stderr, f"Error: {exc}")

    if not args.quiet and not args.input:
        stdout.write("\n")
    stdout.write(build_text_report(results))

    try:
        if args.html:
            export_standard_report_html(shaft, results, args.html)
        if args.csv:
            write_diag_results_csv(results, args.csv)
        if args.bundle:
            export_results_bundle_zip(shaft, results, args.bundle)
    except (OSError, ResultExportError) as exc:
        return _fail(stderr, f"Export failed: {exc}")
    return 0
