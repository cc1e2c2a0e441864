#!/usr/bin/env python3
"""Generate reference token-id fixtures from HuggingFace transformers.

Usage:
    uv run python scripts/gen_fixtures.py
    uv run python scripts/gen_fixtures.py --model sentence-transformers/all-MiniLM-L6-v2
    uv run python scripts/gen_fixtures.py --prompts tests/test_prompts.txt --output tests/hf_tokenized_ids.txt
"""

import argparse
import sys
from pathlib import Path

import transformers
from transformers import AutoTokenizer

from tokenizer_conformance.backends import HFTokenizerPort
from tokenizer_conformance.fixtures import (
    EXPECTED_FILE,
    PROMPTS_FILE,
    format_token_ids,
    load_prompts,
)

REFERENCE_MODEL = "sentence-transformers/all-MiniLM-L6-v2"
FIXTURES_DIR = Path("tests")


def generate_ids(tokenizer, prompts: list[str]) -> list[list[int]]:
    """Reference ids for each prompt, special tokens included."""
    max_length = HFTokenizerPort(tokenizer).max_tokens()
    sequences = []
    for prompt in prompts:
        encoded = tokenizer(prompt, truncation=True, max_length=max_length)
        sequences.append(list(encoded["input_ids"]))
    return sequences


def write_fixture(path: Path, sequences: list[list[int]]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        "".join(format_token_ids(ids) + "\n" for ids in sequences), encoding="utf-8"
    )


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Generate reference token-id fixtures from HuggingFace transformers"
    )
    parser.add_argument(
        "--model",
        default=REFERENCE_MODEL,
        help=f"HF model id or local directory (default: {REFERENCE_MODEL})",
    )
    parser.add_argument(
        "--prompts",
        type=Path,
        default=FIXTURES_DIR / PROMPTS_FILE,
        help="prompt corpus, one prompt per line",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=FIXTURES_DIR / EXPECTED_FILE,
        help="where to write the expected token ids",
    )
    args = parser.parse_args()

    prompts = load_prompts(args.prompts)
    if not prompts:
        print(f"Error: no prompts found in {args.prompts}", file=sys.stderr)
        sys.exit(1)

    print(f"Loading tokenizer: {args.model} (transformers {transformers.__version__})")
    tokenizer = AutoTokenizer.from_pretrained(args.model)

    sequences = generate_ids(tokenizer, prompts)
    write_fixture(args.output, sequences)
    total = sum(len(ids) for ids in sequences)
    print(f"Wrote: {args.output} ({len(sequences)} prompts, {total} tokens)")


if __name__ == "__main__":
    main()
