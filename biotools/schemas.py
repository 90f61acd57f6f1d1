"""Data models for alignment traces, rendering and the HTTP API."""
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, model_validator


class AlignmentMode(str, Enum):
    LOCAL = "local"
    GLOBAL = "global"
    SEMIGLOBAL = "semiglobal"


class OpKind(str, Enum):
    MATCH = "match"
    MISMATCH = "mismatch"
    INSERTION = "insertion"  # query base only
    DELETION = "deletion"  # reference base only
    QUERY_CLIP = "query_clip"
    REFERENCE_CLIP = "reference_clip"


CLIP_KINDS = frozenset({OpKind.QUERY_CLIP, OpKind.REFERENCE_CLIP})
QUERY_KINDS = frozenset({OpKind.MATCH, OpKind.MISMATCH, OpKind.INSERTION})
REFERENCE_KINDS = frozenset({OpKind.MATCH, OpKind.MISMATCH, OpKind.DELETION})


class Operation(BaseModel):
    """One step of an alignment trace. Only clips carry a run length."""

    model_config = ConfigDict(frozen=True)

    kind: OpKind
    length: int = 1

    @model_validator(mode="after")
    def check_length(self) -> "Operation":
        if self.kind in CLIP_KINDS:
            if self.length < 0:
                raise ValueError("clip length must be non-negative")
        elif self.length != 1:
            raise ValueError(f"{self.kind.value} always spans one base")
        return self

    @property
    def consumes_query(self) -> bool:
        return self.kind in QUERY_KINDS

    @property
    def consumes_reference(self) -> bool:
        return self.kind in REFERENCE_KINDS


MATCH = Operation(kind=OpKind.MATCH)
MISMATCH = Operation(kind=OpKind.MISMATCH)
INSERTION = Operation(kind=OpKind.INSERTION)
DELETION = Operation(kind=OpKind.DELETION)


def query_clip(length: int) -> Operation:
    return Operation(kind=OpKind.QUERY_CLIP, length=length)


def reference_clip(length: int) -> Operation:
    return Operation(kind=OpKind.REFERENCE_CLIP, length=length)


class Trace(BaseModel):
    """
    Result of one aligner run.

    Bounds are half-open, 0-based indices into the sequences the trace was
    computed over.
    """

    model_config = ConfigDict(frozen=True)

    operations: tuple[Operation, ...] = ()
    query_start: int = 0
    query_end: int = 0
    reference_start: int = 0
    reference_end: int = 0
    score: int = 0

    @model_validator(mode="after")
    def check_bounds(self) -> "Trace":
        query_bases = sum(1 for op in self.operations if op.consumes_query)
        reference_bases = sum(1 for op in self.operations if op.consumes_reference)
        if query_bases != self.query_end - self.query_start:
            raise ValueError(
                f"trace consumes {query_bases} query bases but spans "
                f"[{self.query_start}, {self.query_end})"
            )
        if reference_bases != self.reference_end - self.reference_start:
            raise ValueError(
                f"trace consumes {reference_bases} reference bases but spans "
                f"[{self.reference_start}, {self.reference_end})"
            )
        return self


class ScoringScheme(BaseModel):
    """Match/mismatch scores and affine gap scores (gap scores are <= 0)."""

    model_config = ConfigDict(frozen=True)

    match_score: int = 1
    mismatch_score: int = -1
    gap_open: int = Field(-2, le=0)
    gap_extend: int = Field(-1, le=0)

    @classmethod
    def from_penalties(
        cls, gap_open: int, gap_extend: int, **scores: int
    ) -> "ScoringScheme":
        """Build a scheme from the non-negative, user-facing gap penalties."""
        return cls(gap_open=-gap_open, gap_extend=-gap_extend, **scores)

    def score_pair(self, a: str, b: str) -> int:
        return self.match_score if a.upper() == b.upper() else self.mismatch_score


class RenderOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    hide_coordinates: bool = False
    try_reverse_complement: bool = False
    line_width: PositiveInt = 60
    zero_based_coordinates: bool = False


class DisplayLine(BaseModel):
    """One row-triple of rendered output with its raw, 0-based index ranges."""

    model_config = ConfigDict(frozen=True)

    query: str
    symbols: str
    reference: str
    query_start: int
    query_end: int
    reference_start: int
    reference_end: int


class RenderedAlignment(BaseModel):
    model_config = ConfigDict(frozen=True)

    lines: tuple[DisplayLine, ...] = ()
    was_reverse_complemented: bool = False
    query_length: int = 0


# --- HTTP API ---

class SequenceRequest(BaseModel):
    sequences: list[str]


class SequenceResponse(BaseModel):
    result: Union[int, float, str]


class PairwiseRequest(BaseModel):
    query: str
    reference: str
    mode: AlignmentMode = AlignmentMode.LOCAL
    gap_open: Optional[int] = Field(None, ge=0)
    gap_extend: Optional[int] = Field(None, ge=0)
    hide_coords: bool = False
    try_rc: bool = False
    line_width: Optional[PositiveInt] = None
    use_0_based_coords: bool = False


class PairwiseResponse(BaseModel):
    text: str
    score: int
    mode: AlignmentMode
    reverse_complemented: bool
    query_start: int
    query_end: int
    reference_start: int
    reference_end: int
