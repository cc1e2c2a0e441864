"""Fixture corpora: prompts and the reference token ids pinned for them.

Two parallel text files, paired line by line:

    tests/test_prompts.txt      one prompt per line (verbatim)
    tests/hf_tokenized_ids.txt  one comma-separated id list per line

A file that cannot be read is reported on stderr and loads as an empty
corpus; build_cases() then refuses to produce test cases from it.
"""

import sys
from pathlib import Path
from typing import NamedTuple

from tokenizer_conformance.errors import (
    FixtureFormatError,
    FixtureIOError,
    FixtureSizeMismatch,
)

PROMPTS_FILE = "test_prompts.txt"
EXPECTED_FILE = "hf_tokenized_ids.txt"


class TestCase(NamedTuple):
    index: int
    prompt: str
    expected: list[int]


# Not a pytest test class, despite the name.
TestCase.__test__ = False


def _strip_terminator(line: str) -> str:
    # Only "\n" ends a line; a lone "\r" is prompt content.
    if line.endswith("\r\n"):
        return line[:-2]
    if line.endswith("\n"):
        return line[:-1]
    return line


def _read_lines(path: str | Path) -> list[str] | None:
    try:
        with open(path, encoding="utf-8", newline="\n") as f:
            return [_strip_terminator(line) for line in f]
    except (OSError, UnicodeDecodeError) as e:
        print(f"can not open file: {path} ({e})", file=sys.stderr)
        return None


def load_prompts(path: str | Path) -> list[str]:
    """Load one prompt per line. Empty lines are prompts too."""
    lines = _read_lines(path)
    return lines if lines is not None else []


def parse_token_ids(line: str) -> list[int]:
    """Parse ``"101,7592,102"`` into ``[101, 7592, 102]``.

    An empty line is an empty sequence and one trailing comma is allowed.
    Anything else that is not a non-negative base-10 integer raises
    FixtureFormatError; nothing is coerced or dropped.
    """
    if not line.strip():
        return []
    fields = line.split(",")
    if len(fields) > 1 and not fields[-1].strip():
        fields = fields[:-1]
    ids = []
    for field in fields:
        text = field.strip()
        if not text.isascii() or not text.isdigit():
            raise FixtureFormatError(field)
        ids.append(int(text))
    return ids


def format_token_ids(ids: list[int]) -> str:
    return ",".join(str(i) for i in ids)


def load_expected(path: str | Path) -> list[list[int]]:
    """Load one expected token sequence per line.

    Raises FixtureFormatError on the first malformed field, with the file
    and 1-based line number attached.
    """
    lines = _read_lines(path)
    if lines is None:
        return []
    sequences = []
    for line_no, line in enumerate(lines, start=1):
        try:
            sequences.append(parse_token_ids(line))
        except FixtureFormatError as e:
            raise FixtureFormatError(e.field, line_no, str(path)) from None
    return sequences


def build_cases(prompts: list[str], expected: list[list[int]]) -> list[TestCase]:
    """Pair prompts with expected sequences by position."""
    if not prompts or not expected:
        raise FixtureIOError(
            f"failed to read test data ({len(prompts)} prompts, "
            f"{len(expected)} expected token sequences)"
        )
    if len(prompts) != len(expected):
        raise FixtureSizeMismatch(len(prompts), len(expected))
    return [
        TestCase(i, prompt, ids)
        for i, (prompt, ids) in enumerate(zip(prompts, expected))
    ]


def load_cases(prompts_path: str | Path, expected_path: str | Path) -> list[TestCase]:
    expected = load_expected(expected_path)
    prompts = load_prompts(prompts_path)
    return build_cases(prompts, expected)
