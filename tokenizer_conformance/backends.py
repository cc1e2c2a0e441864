"""Loading the candidate tokenizer behind a TokenizerPort.

Default: a HuggingFace tokenizer directory (or hub id) wrapped by
HFTokenizerPort. Alternative: ``--loader pkg.module:factory``, where
``factory(model_path, use_cpu)`` returns any object implementing the port.
"""

import importlib

import torch
import transformers
from transformers import AutoTokenizer

from tokenizer_conformance.errors import TokenizerLoadError, VocabularyLookupError
from tokenizer_conformance.port import TokenizerPort

# transformers uses a huge sentinel for "no limit"; BERT-family models cap at 512.
DEFAULT_MAX_TOKENS = 512
UNBOUNDED_MAX_LENGTH = 1_000_000


def resolve_device(use_cpu: bool) -> str:
    """'cpu' when forced or when no CUDA device is present, else 'cuda'."""
    if use_cpu or not torch.cuda.is_available():
        return "cpu"
    return "cuda"


class HFTokenizerPort:
    def __init__(self, tokenizer, device: str = "cpu"):
        self.tokenizer = tokenizer
        self.device = device

    def max_tokens(self) -> int:
        limit = getattr(self.tokenizer, "model_max_length", None)
        if not isinstance(limit, int) or limit <= 0 or limit > UNBOUNDED_MAX_LENGTH:
            return DEFAULT_MAX_TOKENS
        return limit

    def tokenize(self, text: str, max_tokens: int) -> list[int]:
        encoded = self.tokenizer(text, truncation=True, max_length=max_tokens)
        return list(encoded["input_ids"])

    def id_to_token(self, token_id: int) -> str:
        if not 0 <= token_id < len(self.tokenizer):
            raise VocabularyLookupError(token_id)
        token = self.tokenizer.convert_ids_to_tokens(token_id)
        if token is None:
            raise VocabularyLookupError(token_id)
        return token


def load_hf_tokenizer(model_path: str, use_cpu: bool = False) -> HFTokenizerPort:
    device = resolve_device(use_cpu)
    try:
        tokenizer = AutoTokenizer.from_pretrained(model_path)
    except (OSError, ValueError) as e:
        raise TokenizerLoadError(f"failed to load model from '{model_path}': {e}") from e
    print(
        f"Loaded tokenizer: {model_path} ({type(tokenizer).__name__}, "
        f"transformers {transformers.__version__}, backend={device})"
    )
    return HFTokenizerPort(tokenizer, device=device)


def resolve_factory(target: str):
    """Import ``pkg.module:factory`` and return the factory callable."""
    module_name, sep, attr = target.partition(":")
    if not sep or not module_name or not attr:
        raise TokenizerLoadError(f"invalid loader '{target}' (expected MODULE:FACTORY)")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise TokenizerLoadError(f"cannot import loader module '{module_name}': {e}") from e
    factory = getattr(module, attr, None)
    if not callable(factory):
        raise TokenizerLoadError(f"loader '{target}' is not callable")
    return factory


def load_tokenizer(model_path: str, use_cpu: bool = False, loader: str | None = None) -> TokenizerPort:
    """Load the candidate tokenizer, raising TokenizerLoadError on failure."""
    if loader is None:
        return load_hf_tokenizer(model_path, use_cpu)

    factory = resolve_factory(loader)
    try:
        port = factory(model_path, use_cpu)
    except (OSError, ValueError) as e:
        raise TokenizerLoadError(f"failed to load model from '{model_path}': {e}") from e
    if port is None:
        raise TokenizerLoadError(f"failed to load model from '{model_path}'")
    if not isinstance(port, TokenizerPort):
        raise TokenizerLoadError(
            f"loader '{loader}' returned {type(port).__name__}, "
            "which lacks tokenize/max_tokens/id_to_token"
        )
    print(f"Loaded tokenizer: {model_path} (loader={loader})")
    return port
