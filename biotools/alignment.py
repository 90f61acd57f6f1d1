"""Pairwise alignment using Biopython, with an optional reverse-complement pass."""
import itertools
import logging
from typing import NamedTuple, Optional, Protocol, Sequence

from Bio import Align

from .config import settings
from .errors import EmptySequence, InvalidSequenceCount
from .render import build_rendered_alignment, format_alignment
from .schemas import (
    DELETION,
    INSERTION,
    MATCH,
    MISMATCH,
    AlignmentMode,
    RenderedAlignment,
    RenderOptions,
    ScoringScheme,
    Trace,
)
from .sequences import join_fragments, reverse_complement, validate_sequence

LOGGER = logging.getLogger(__name__)


class Aligner(Protocol):
    def align(
        self, mode: AlignmentMode, query: str, reference: str, scoring: ScoringScheme
    ) -> Trace:
        ...


class BiopythonAligner:
    """
    Aligner backed by Biopython's PairwiseAligner.

    Semiglobal alignment consumes the whole query while reference overhang
    at either end is free and left out of the trace. When several optimal
    alignments exist, the one ending furthest along the query (then the
    reference) wins, and among those the one starting latest.
    """

    def __init__(self, max_candidates: int = settings.MAX_CANDIDATES) -> None:
        self.max_candidates = max_candidates

    def align(
        self, mode: AlignmentMode, query: str, reference: str, scoring: ScoringScheme
    ) -> Trace:
        aligner = _build_aligner(mode, scoring)
        # Scoring is case-insensitive; the trace indexes the original strings.
        alignments = aligner.align(reference.upper(), query.upper())
        best = _pick_alignment(itertools.islice(alignments, self.max_candidates))
        if best is None:
            trace = Trace()
        else:
            trace = _alignment_to_trace(best, query, reference, mode)
        LOGGER.debug(
            "%s alignment of %d x %d bases scored %d",
            mode.value, len(query), len(reference), trace.score,
        )
        return trace


def _build_aligner(mode: AlignmentMode, scoring: ScoringScheme) -> Align.PairwiseAligner:
    aligner = Align.PairwiseAligner()
    aligner.mode = "local" if mode is AlignmentMode.LOCAL else "global"
    aligner.match_score = scoring.match_score
    aligner.mismatch_score = scoring.mismatch_score
    aligner.open_gap_score = scoring.gap_open
    aligner.extend_gap_score = scoring.gap_extend
    if mode is AlignmentMode.SEMIGLOBAL:
        # Gaps in the query row at either end are reference overhang.
        # Newer Biopython releases renamed query_end_gap_score to end_deletion_score.
        if hasattr(aligner, "end_deletion_score"):
            aligner.end_deletion_score = 0
        else:
            aligner.query_end_gap_score = 0
    return aligner


def _span(alignment) -> tuple[int, int, int, int]:
    reference_blocks, query_blocks = alignment.aligned
    if len(query_blocks) == 0:
        return 0, 0, 0, 0
    return (
        int(query_blocks[-1][1]),
        int(reference_blocks[-1][1]),
        int(query_blocks[0][0]),
        int(reference_blocks[0][0]),
    )


def _pick_alignment(alignments):
    best = None
    best_span = None
    for alignment in alignments:
        span = _span(alignment)
        if best is None or span > best_span:
            best, best_span = alignment, span
    return best


def _alignment_to_trace(alignment, query: str, reference: str, mode: AlignmentMode) -> Trace:
    """Convert a Biopython alignment (reference as target) into a Trace."""
    reference_blocks, query_blocks = alignment.aligned
    has_blocks = len(query_blocks) > 0

    if mode is AlignmentMode.LOCAL and has_blocks:
        query_pos, reference_pos = int(query_blocks[0][0]), int(reference_blocks[0][0])
    elif mode is AlignmentMode.SEMIGLOBAL and has_blocks:
        query_pos, reference_pos = 0, int(reference_blocks[0][0])
    else:
        query_pos, reference_pos = 0, 0
    query_start, reference_start = query_pos, reference_pos

    operations = []
    for (rs, re), (qs, qe) in zip(reference_blocks, query_blocks):
        rs, re, qs, qe = int(rs), int(re), int(qs), int(qe)
        operations.extend([DELETION] * (rs - reference_pos))
        operations.extend([INSERTION] * (qs - query_pos))
        for offset in range(re - rs):
            same = query[qs + offset].upper() == reference[rs + offset].upper()
            operations.append(MATCH if same else MISMATCH)
        query_pos, reference_pos = qe, re

    if mode is AlignmentMode.GLOBAL:
        operations.extend([DELETION] * (len(reference) - reference_pos))
        reference_pos = len(reference)
    if mode is not AlignmentMode.LOCAL:
        operations.extend([INSERTION] * (len(query) - query_pos))
        query_pos = len(query)

    return Trace(
        operations=tuple(operations),
        query_start=query_start,
        query_end=query_pos,
        reference_start=reference_start,
        reference_end=reference_pos,
        score=int(round(alignment.score)),
    )


class OrientationResult(NamedTuple):
    trace: Trace
    query: str
    reverse_complemented: bool


def choose_orientation(
    aligner: Aligner,
    mode: AlignmentMode,
    query: str,
    reference: str,
    scoring: ScoringScheme,
    try_reverse_complement: bool,
) -> OrientationResult:
    """
    Align the query as given and, if requested, as its reverse complement.

    The reverse complement is kept only when it scores strictly higher; a tie
    keeps the forward orientation.
    """
    forward = aligner.align(mode, query, reference, scoring)
    if not try_reverse_complement:
        return OrientationResult(forward, query, False)

    query_rc = reverse_complement(query)
    backward = aligner.align(mode, query_rc, reference, scoring)
    if backward.score > forward.score:
        LOGGER.info(
            "Reverse complement scored %d over forward %d; using it",
            backward.score, forward.score,
        )
        return OrientationResult(backward, query_rc, True)
    LOGGER.info(
        "Forward scored %d, reverse complement %d; keeping forward",
        forward.score, backward.score,
    )
    return OrientationResult(forward, query, False)


class PairwiseResult(NamedTuple):
    orientation: OrientationResult
    rendered: RenderedAlignment
    text: str


def align_sequences(
    sequences: Sequence[str],
    mode: AlignmentMode,
    scoring: ScoringScheme,
    options: RenderOptions,
    aligner: Optional[Aligner] = None,
) -> PairwiseResult:
    """Align a (query, reference) pair and render the chosen orientation as text."""
    if len(sequences) != 2:
        raise InvalidSequenceCount(len(sequences))
    query, reference = (validate_sequence(join_fragments([s])) for s in sequences)
    if not query or not reference:
        raise EmptySequence("cannot align an empty sequence")

    if aligner is None:
        aligner = BiopythonAligner()
    orientation = choose_orientation(
        aligner, mode, query, reference, scoring, options.try_reverse_complement
    )
    rendered = build_rendered_alignment(
        orientation.trace,
        orientation.query,
        reference,
        options.line_width,
        was_reverse_complemented=orientation.reverse_complemented,
        query_length=len(query),
    )
    return PairwiseResult(orientation, rendered, format_alignment(rendered, options))
