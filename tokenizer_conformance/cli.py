"""Command-line driver for the tokenizer conformance oracle.

Usage:
    uv run tokenizer-conformance                          # default model, ./tests fixtures
    uv run tokenizer-conformance -m models/all-MiniLM-L6-v2 --cpu
    uv run tokenizer-conformance --loader mypkg.bert:load --keep-going --ticket
"""

import argparse
import sys
from pathlib import Path
from typing import NamedTuple

import transformers

from tokenizer_conformance.backends import load_tokenizer
from tokenizer_conformance.errors import FixtureError, TokenizerLoadError
from tokenizer_conformance.fixtures import EXPECTED_FILE, PROMPTS_FILE, load_cases
from tokenizer_conformance.report import format_ticket
from tokenizer_conformance.runner import run

DEFAULT_MODEL = "models/all-MiniLM-L6-v2"

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_MISMATCH = 3


class Params(NamedTuple):
    model: str = DEFAULT_MODEL
    use_cpu: bool = False
    fixtures: Path | None = None
    loader: str | None = None
    keep_going: bool = False
    ticket: bool = False
    color: bool = True


def fixture_dir(model_path: str) -> Path:
    """Fixtures live in ``tests/`` beside the ``models/`` directory holding the model.

    ``/work/models/minilm`` -> ``/work/tests``; a path without a ``models``
    component falls back to ``./tests``.
    """
    parts = Path(model_path).parts
    for i in range(len(parts) - 2, -1, -1):
        if parts[i] == "models":
            root = Path(*parts[:i]) if i > 0 else Path(".")
            return root / "tests"
    return Path(".") / "tests"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tokenizer-conformance",
        description="Check a tokenizer against pinned reference token ids",
    )
    parser.add_argument(
        "-m", "--model",
        default=DEFAULT_MODEL,
        metavar="FNAME",
        help=f"model path (default: {DEFAULT_MODEL})",
    )
    parser.add_argument(
        "-c", "--cpu",
        action="store_true",
        help="use CPU backend (default: use CUDA if available)",
    )
    parser.add_argument(
        "--fixtures",
        type=Path,
        metavar="DIR",
        help=f"directory holding {PROMPTS_FILE} and {EXPECTED_FILE} "
        "(default: tests/ beside the model's models/ directory)",
    )
    parser.add_argument(
        "--loader",
        metavar="MODULE:FACTORY",
        help="load the candidate with factory(model_path, use_cpu) instead of transformers",
    )
    parser.add_argument(
        "--keep-going",
        action="store_true",
        help="report every mismatching prompt instead of stopping at the first",
    )
    parser.add_argument(
        "--ticket", action="store_true", help="Print GitHub issue for failures"
    )
    parser.add_argument(
        "--no-color", action="store_true", help="disable ANSI colors"
    )
    return parser


def parse_params(argv: list[str] | None = None) -> Params:
    args = build_parser().parse_args(argv)
    return Params(
        model=args.model,
        use_cpu=args.cpu,
        fixtures=args.fixtures,
        loader=args.loader,
        keep_going=args.keep_going,
        ticket=args.ticket,
        color=not args.no_color,
    )


def run_suite(params: Params) -> int:
    """Load, check, summarize. Returns the process exit code."""
    try:
        port = load_tokenizer(params.model, params.use_cpu, params.loader)
    except TokenizerLoadError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILURE

    fixtures = params.fixtures if params.fixtures is not None else fixture_dir(params.model)
    try:
        cases = load_cases(fixtures / PROMPTS_FILE, fixtures / EXPECTED_FILE)
    except FixtureError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILURE

    print(f"Loaded {len(cases)} test cases from {fixtures}")
    outcome = run(cases, port, fail_fast=not params.keep_going, color=params.color)

    failures = outcome.failures
    print(f"\n{'='*60}")
    print(
        f"  Results: {outcome.passed}/{outcome.total} passed, {len(failures)} failed"
        + (f", {outcome.skipped} not run" if outcome.skipped else "")
    )
    print(f"{'='*60}")

    if failures and params.ticket:
        print(f"\n{'='*60}")
        print("  TICKET (copy to tokenizer issue)")
        print(f"{'='*60}")
        print(format_ticket(failures, params.model, transformers.__version__))

    return EXIT_OK if outcome.ok else EXIT_MISMATCH


def main():
    sys.exit(run_suite(parse_params()))


if __name__ == "__main__":
    main()
