"""The tokenizer capability the oracle depends on.

Anything with these three methods can be checked: the HuggingFace adapter
in backends.py, a plugin loaded with --loader, or a scripted mock in tests.
"""

from collections.abc import Sequence
from typing import Protocol, runtime_checkable


@runtime_checkable
class TokenizerPort(Protocol):
    def tokenize(self, text: str, max_tokens: int) -> Sequence[int]:
        """Token ids for ``text``, special tokens included, at most ``max_tokens``."""
        ...

    def max_tokens(self) -> int:
        ...

    def id_to_token(self, token_id: int) -> str:
        """Display form of ``token_id``; raises a LookupError for unknown ids."""
        ...
