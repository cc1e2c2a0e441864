"""Run fixture cases through a candidate tokenizer and compare exactly."""

from tokenizer_conformance.fixtures import TestCase
from tokenizer_conformance.port import TokenizerPort
from tokenizer_conformance.report import GREEN, RESET, first_divergence, report

PREVIEW_CHARS = 16


class CaseResult:
    def __init__(self, case: TestCase):
        self.name = f"case/{case.index}"
        self.index = case.index
        self.prompt = case.prompt
        self.expected = case.expected
        self.actual: list[int] = []
        self.passed = False
        self.error = ""
        self.details = ""

    def pass_(self, details: str = ""):
        self.passed = True
        self.details = details

    def fail(self, error: str, details: str = ""):
        self.passed = False
        self.error = error
        self.details = details


class SuiteOutcome:
    def __init__(self, total: int):
        self.total = total
        self.results: list[CaseResult] = []

    @property
    def passed(self) -> int:
        return sum(1 for r in self.results if r.passed)

    @property
    def failures(self) -> list[CaseResult]:
        return [r for r in self.results if not r.passed]

    @property
    def skipped(self) -> int:
        return self.total - len(self.results)

    @property
    def ok(self) -> bool:
        return not self.failures and self.skipped == 0


def check_case(case: TestCase, port: TokenizerPort) -> CaseResult:
    """Tokenize one prompt and compare with its expected ids."""
    r = CaseResult(case)
    max_tokens = port.max_tokens()
    r.actual = list(port.tokenize(case.prompt, max_tokens))
    if r.actual == case.expected:
        r.pass_(f"{len(r.actual)} tokens")
    else:
        k = first_divergence(case.expected, r.actual)
        r.fail(
            f"token mismatch at index {k}",
            f"expected {len(case.expected)} tokens, got {len(r.actual)}",
        )
    return r


def run(
    cases: list[TestCase],
    port: TokenizerPort,
    *,
    fail_fast: bool = True,
    color: bool = True,
) -> SuiteOutcome:
    """Check every case in order.

    With fail_fast (the default) the first mismatch is reported and no
    further prompt is tokenized.
    """
    outcome = SuiteOutcome(len(cases))
    for case in cases:
        r = check_case(case, port)
        outcome.results.append(r)
        if r.passed:
            icon = f"{GREEN}✓{RESET}" if color else "ok"
            print(f"  {icon} Success '{case.prompt[:PREVIEW_CHARS]}...'")
            continue
        report(case.prompt, case.expected, r.actual, port.id_to_token, color=color)
        if fail_fast:
            break
    return outcome
