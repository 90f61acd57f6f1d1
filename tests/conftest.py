"""Shared test fixtures for biotools tests."""
import pytest

from biotools.schemas import (
    DELETION,
    INSERTION,
    MATCH,
    MISMATCH,
    AlignmentMode,
    ScoringScheme,
    Trace,
)

OPS_BY_CODE = {"M": MATCH, "X": MISMATCH, "I": INSERTION, "D": DELETION}


def trace_from_code(
    code: str, query_start: int = 0, reference_start: int = 0, score: int = 0
) -> Trace:
    """Build a trace from a compact code: M match, X mismatch, I insertion, D deletion."""
    operations = tuple(OPS_BY_CODE[c] for c in code)
    return Trace(
        operations=operations,
        query_start=query_start,
        query_end=query_start + sum(op.consumes_query for op in operations),
        reference_start=reference_start,
        reference_end=reference_start + sum(op.consumes_reference for op in operations),
        score=score,
    )


class StubAligner:
    """Aligner returning canned traces keyed by the query it is given."""

    def __init__(self, traces: dict[str, Trace]) -> None:
        self.traces = traces
        self.calls: list[tuple[AlignmentMode, str, str]] = []

    def align(self, mode, query, reference, scoring):
        self.calls.append((mode, query, reference))
        return self.traces[query]


@pytest.fixture
def make_trace():
    return trace_from_code


@pytest.fixture
def scoring() -> ScoringScheme:
    return ScoringScheme.from_penalties(2, 1)


@pytest.fixture
def stub_aligner():
    return StubAligner
