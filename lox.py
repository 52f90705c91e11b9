"""Command-line driver: scan, parse and print expressions.

  lox            interactive prompt, one line at a time
  lox <script>   run a source file once
"""
import argparse
import logging
import os
import sys

from lexer import scan
from parser import parse
from printer import print_expr

logger = logging.getLogger(__name__)

EX_DATAERR = 65
EX_NOINPUT = 66


def run(source: str) -> bool:
    """Run one chunk of source. Returns True when no error was reported."""
    tokens, scan_errors = scan(source)
    expr, parse_errors = parse(tokens)
    for message in scan_errors + parse_errors:
        print(message, file=sys.stderr)
    if expr is not None:
        print(print_expr(expr))
    return not scan_errors and not parse_errors


def run_file(path: str) -> int:
    try:
        with open(path, "r", encoding="utf-8") as f:
            source = f.read()
    except OSError as e:
        print(f"Could not read {path}: {e}", file=sys.stderr)
        return EX_NOINPUT
    return 0 if run(source) else EX_DATAERR


def run_prompt(stdin=None) -> int:
    stdin = stdin or sys.stdin
    while True:
        print("> ", end="", flush=True)
        line = stdin.readline()
        if not line:
            print()
            break
        run(line)
    return 0


def main(argv=None) -> int:
    logging.basicConfig(level=os.getenv("LOX_LOG_LEVEL", "WARNING").upper())
    ap = argparse.ArgumentParser(prog="lox", description="Parse and print Lox expressions.")
    ap.add_argument("script", nargs="?", help="source file to run; omit for a prompt")
    args = ap.parse_args(argv)

    if args.script is not None:
        logger.debug("running %s", args.script)
        return run_file(args.script)
    return run_prompt()


if __name__ == "__main__":
    sys.exit(main())
