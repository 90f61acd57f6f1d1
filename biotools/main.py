"""FastAPI application exposing the sequence tools and pairwise alignment."""
from fastapi import APIRouter, FastAPI, HTTPException

from . import sequences
from .alignment import align_sequences
from .config import settings
from .errors import BiotoolsError
from .schemas import (
    PairwiseRequest,
    PairwiseResponse,
    RenderOptions,
    ScoringScheme,
    SequenceRequest,
    SequenceResponse,
)

app = FastAPI(title=settings.APP_NAME, version=settings.APP_VERSION)
router = APIRouter(prefix=settings.API_PREFIX)


def _run(func, *args):
    try:
        return func(*args)
    except BiotoolsError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/health")
async def health() -> dict:
    return {"status": "ok"}

# --- Single-sequence endpoints ---

@router.post("/reverse-complement")
async def reverse_complement(request: SequenceRequest) -> SequenceResponse:
    """Reverse-complement the joined sequence fragments."""
    sequence = sequences.join_fragments(request.sequences)
    return SequenceResponse(result=_run(sequences.reverse_complement, sequence))

@router.post("/complement")
async def complement(request: SequenceRequest) -> SequenceResponse:
    sequence = sequences.join_fragments(request.sequences)
    return SequenceResponse(result=_run(sequences.complement, sequence))

@router.post("/length")
async def length(request: SequenceRequest) -> SequenceResponse:
    """Count bases, ignoring gap characters."""
    sequence = sequences.join_fragments(request.sequences)
    return SequenceResponse(result=_run(sequences.sequence_length, sequence))

@router.post("/gc-content")
async def gc_content(request: SequenceRequest) -> SequenceResponse:
    sequence = sequences.join_fragments(request.sequences)
    return SequenceResponse(result=_run(sequences.gc_content, sequence))

# --- Alignment endpoints ---

@router.post("/pairwise")
async def pairwise(request: PairwiseRequest) -> PairwiseResponse:
    """Align query against reference and return the rendered text block."""
    scoring = ScoringScheme.from_penalties(
        settings.GAP_OPEN if request.gap_open is None else request.gap_open,
        settings.GAP_EXTEND if request.gap_extend is None else request.gap_extend,
        match_score=settings.MATCH_SCORE,
        mismatch_score=settings.MISMATCH_SCORE,
    )
    options = RenderOptions(
        hide_coordinates=request.hide_coords,
        try_reverse_complement=request.try_rc,
        line_width=request.line_width or settings.LINE_WIDTH,
        zero_based_coordinates=request.use_0_based_coords,
    )
    result = _run(
        align_sequences, [request.query, request.reference], request.mode, scoring, options
    )
    trace = result.orientation.trace
    return PairwiseResponse(
        text=result.text,
        score=trace.score,
        mode=request.mode,
        reverse_complemented=result.orientation.reverse_complemented,
        query_start=trace.query_start,
        query_end=trace.query_end,
        reference_start=trace.reference_start,
        reference_end=trace.reference_end,
    )


app.include_router(router)

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL)
