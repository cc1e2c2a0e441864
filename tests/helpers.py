"""Shared helpers for conformance tests. Importable by all test_*.py files."""

from pathlib import Path

from tokenizer_conformance.errors import VocabularyLookupError
from tokenizer_conformance.fixtures import EXPECTED_FILE, PROMPTS_FILE

ROOT = Path(__file__).parent.parent
FIXTURES_DIR = ROOT / "tests"
MODELS_DIR = ROOT / "models"

LOCAL_MODEL_DIR = MODELS_DIR / "all-MiniLM-L6-v2"

# Slice of the bert-base-uncased vocabulary used by the shipped fixtures.
VOCAB = {
    0: "[PAD]",
    100: "[UNK]",
    101: "[CLS]",
    102: "[SEP]",
    999: "!",
    1010: ",",
    1012: ".",
    2088: "world",
    5447: "quebec",
    7592: "hello",
}
VOCAB_SIZE = 30522

HELLO_PROMPT = "Hello world!"
HELLO_IDS = [101, 7592, 2088, 999, 102]


class MockTokenizer:
    """Scripted TokenizerPort: returns canned ids per prompt and logs calls."""

    def __init__(self, outputs: dict[str, list[int]], max_len: int = 512, vocab=None):
        self.outputs = outputs
        self.max_len = max_len
        self.vocab = VOCAB if vocab is None else vocab
        self.calls: list[str] = []

    def max_tokens(self) -> int:
        return self.max_len

    def tokenize(self, text: str, max_tokens: int) -> list[int]:
        self.calls.append(text)
        return list(self.outputs[text])[:max_tokens]

    def id_to_token(self, token_id: int) -> str:
        if not 0 <= token_id < VOCAB_SIZE:
            raise VocabularyLookupError(token_id)
        return self.vocab.get(token_id, f"tok{token_id}")


def write_fixtures(directory: Path, prompts: list[str], id_lines: list[str]) -> Path:
    """Write a prompt corpus and an expected-ids corpus into ``directory``."""
    directory.mkdir(parents=True, exist_ok=True)
    (directory / PROMPTS_FILE).write_text(
        "".join(p + "\n" for p in prompts), encoding="utf-8"
    )
    (directory / EXPECTED_FILE).write_text(
        "".join(line + "\n" for line in id_lines), encoding="utf-8"
    )
    return directory


def load_mock(model_path, use_cpu):
    """--loader factory used by the CLI tests."""
    return MockTokenizer({HELLO_PROMPT: HELLO_IDS})


def load_broken(model_path, use_cpu):
    return MockTokenizer({HELLO_PROMPT: [101, 7592, 2088, 102]})


def load_missing(model_path, use_cpu):
    raise OSError(f"no such model: {model_path}")
