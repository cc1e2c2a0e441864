"""Error taxonomy for the conformance oracle.

Fixture problems are fatal before any tokenization happens. A token-id
mismatch is not an exception: it is a failed CaseResult returned by the
runner (see runner.py).
"""


class ConformanceError(Exception):
    """Base class for every error raised by tokenizer_conformance."""


class FixtureError(ConformanceError):
    """Fixture files cannot be turned into test cases."""


class FixtureIOError(FixtureError):
    """A corpus is missing, unreadable or empty."""


class FixtureFormatError(FixtureError):
    """A token field in the expected-ids file is not a valid token id."""

    def __init__(self, field: str, line_no: int | None = None, path: str | None = None):
        self.field = field
        self.line_no = line_no
        self.path = path
        where = ""
        if path is not None:
            where = f"{path}:"
        if line_no is not None:
            where += f"{line_no}: "
        elif where:
            where += " "
        super().__init__(f"{where}invalid token id {field!r}")


class FixtureSizeMismatch(FixtureError):
    def __init__(self, n_prompts: int, n_expected: int):
        self.n_prompts = n_prompts
        self.n_expected = n_expected
        super().__init__(
            f"test data size mismatch: {n_prompts} prompts vs "
            f"{n_expected} expected token sequences"
        )


class TokenizerLoadError(ConformanceError):
    """The candidate tokenizer could not be loaded."""


class VocabularyLookupError(ConformanceError, LookupError):
    """A token id has no entry in the vocabulary."""

    def __init__(self, token_id: int):
        self.token_id = token_id
        super().__init__(f"token id {token_id} is outside the vocabulary")
