"""Mismatch diagnostics: aligned expected/actual table and failure tickets."""

from collections.abc import Callable
from datetime import date
from typing import NamedTuple

GREEN = "\033[32m"
RED = "\033[31m"
RESET = "\033[0m"

MAX_PROMPT_CHARS = 16000
UNKNOWN_TOKEN = "<unk-id>"
NO_EXPECTED = "-"


class AlignedRow(NamedTuple):
    index: int
    expected: int | None
    actual: int

    @property
    def match(self) -> bool:
        return self.expected == self.actual


def aligned_rows(expected: list[int], actual: list[int]) -> list[AlignedRow]:
    """One row per actual token.

    Past the end of ``expected`` its last element is repeated, so a longer
    actual sequence still gets a full table. With no expected tokens at all
    the expected side is None.
    """
    rows = []
    for i, b in enumerate(actual):
        a = expected[min(i, len(expected) - 1)] if expected else None
        rows.append(AlignedRow(i, a, b))
    return rows


def first_divergence(expected: list[int], actual: list[int]) -> int | None:
    """Index of the first differing position, or None if the sequences are equal."""
    for i, (a, b) in enumerate(zip(expected, actual)):
        if a != b:
            return i
    if len(expected) != len(actual):
        return min(len(expected), len(actual))
    return None


def display_token(id_to_token: Callable[[int], str], token_id: int) -> str:
    try:
        return id_to_token(token_id)
    except (LookupError, ValueError, RuntimeError):
        return UNKNOWN_TOKEN


def format_id_list(ids: list[int]) -> str:
    return "[" + "".join(f"{i}, " for i in ids) + "]"


def format_row(row: AlignedRow, id_to_token: Callable[[int], str], color: bool = True) -> str:
    if row.expected is None:
        left = NO_EXPECTED
    else:
        left = f"{row.expected} -> {display_token(id_to_token, row.expected)}"
    right = f"{row.actual} -> {display_token(id_to_token, row.actual)}"
    text = f"{left} : {right}"
    if not color:
        return text if row.match else f"{text}  <-- mismatch"
    start = GREEN if row.match else RED
    return f"{start}{text}{RESET}"


def format_report(
    prompt: str,
    expected: list[int],
    actual: list[int],
    id_to_token: Callable[[int], str],
    *,
    color: bool = True,
) -> str:
    lines = [
        f"tokenizer test failed: '{prompt[:MAX_PROMPT_CHARS]}'",
        format_id_list(actual),
    ]
    for row in aligned_rows(expected, actual):
        lines.append(format_row(row, id_to_token, color))
    k = first_divergence(expected, actual)
    lines.append(
        f"expected {len(expected)} tokens, got {len(actual)}; "
        f"first divergence at index {k}"
    )
    return "\n".join(lines)


def report(
    prompt: str,
    expected: list[int],
    actual: list[int],
    id_to_token: Callable[[int], str],
    *,
    color: bool = True,
) -> None:
    print(format_report(prompt, expected, actual, id_to_token, color=color))


def format_ticket(failures, model: str, transformers_version: str = "unknown") -> str:
    """Format failed CaseResults as a GitHub issue body."""
    lines = [
        "## Tokenizer Conformance Failures",
        "",
        f"**Date**: {date.today().isoformat()}",
        f"**Model**: `{model}`",
        f"**Reference**: transformers {transformers_version}",
        "",
        f"### {len(failures)} failure(s)",
        "",
    ]
    for f in failures:
        lines.append(f"#### `{f.name}`")
        lines.append(f"**Error**: {f.error}")
        lines.append("```")
        lines.append(f"prompt:   {f.prompt[:MAX_PROMPT_CHARS]!r}")
        lines.append(f"expected: {f.expected}")
        lines.append(f"actual:   {f.actual}")
        lines.append("```")
        lines.append("")

    lines.append("### Reproduction")
    lines.append("```bash")
    lines.append(f"uv run tokenizer-conformance --model {model}")
    lines.append("```")
    return "\n".join(lines)
