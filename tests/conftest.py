"""Shared fixtures for conformance tests.

conftest.py provides fixtures and auto-skips: for importable helpers, use:
  from helpers import MockTokenizer, write_fixtures, ...
"""

from pathlib import Path

import pytest

ROOT = Path(__file__).parent.parent
MODELS_DIR = ROOT / "models"
LOCAL_MODEL_DIR = MODELS_DIR / "all-MiniLM-L6-v2"


def reference_model_available() -> bool:
    return (LOCAL_MODEL_DIR / "tokenizer.json").exists() or (
        LOCAL_MODEL_DIR / "vocab.txt"
    ).exists()


def pytest_collection_modifyitems(config, items):
    """Auto-skip requires_hf tests when the reference tokenizer is not downloaded."""
    if reference_model_available():
        return
    skip_hf = pytest.mark.skip(
        reason=f"reference tokenizer not found in {LOCAL_MODEL_DIR} (run make pull)"
    )
    for item in items:
        if "requires_hf" in {m.name for m in item.iter_markers()}:
            item.add_marker(skip_hf)


@pytest.fixture
def fixtures_path(tmp_path):
    return tmp_path / "tests"
