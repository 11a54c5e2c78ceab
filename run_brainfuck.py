from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from brainfuck import BrainfuckError, BrainfuckProgram, NoInstructions
from interpreter import Interpreter, stream_reader, stream_writer
from tape import DEFAULT_TAPE_SIZE

__version__ = "1.0.0"

logger = logging.getLogger("run_brainfuck")

BANNER = (
    f"Brainfuck interpreter {__version__}\n"
    "This is free software, and you are welcome to redistribute it under the terms of the\n"
    "GNU General Public License. It comes with ABSOLUTELY NO WARRANTY.\n"
)


def positive_int(text: str) -> int:
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="run-brainfuck", description="Run a Brainfuck program")
    parser.add_argument("program", help="path to the Brainfuck source file")
    parser.add_argument("--tape-size", type=positive_int, default=DEFAULT_TAPE_SIZE, metavar="N",
                        help=f"number of cells on the tape (default: {DEFAULT_TAPE_SIZE})")
    parser.add_argument("--banner", action="store_true", help="print the version and licence banner first")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="trace every executed instruction")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="do not report overflow/underflow warnings")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def configure_logging(verbose: bool = False, quiet: bool = False):
    level = logging.DEBUG if verbose else logging.ERROR if quiet else logging.WARNING
    logging.basicConfig(stream=sys.stderr, level=level, format="%(levelname)s: %(message)s")


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose, args.quiet)
    if args.banner:
        print(BANNER, file=sys.stderr)

    try:
        program = BrainfuckProgram.from_file(args.program)
    except OSError as e:
        print(f"Could not open file {args.program}: {e.strerror or e}", file=sys.stderr)
        return 1
    except NoInstructions as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    logger.debug("Loaded %d instructions from %s", len(program), args.program)

    interpreter = Interpreter(program, read=stream_reader(sys.stdin.buffer), write=stream_writer(sys.stdout.buffer),
                              tape_size=args.tape_size)
    try:
        interpreter.run()
    except BrainfuckError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print(f"Interrupted (PC: {interpreter.pc})", file=sys.stderr)
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
