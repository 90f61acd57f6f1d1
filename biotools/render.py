"""Text rendering of alignment traces: expansion, line chunking and coordinates."""
from typing import NamedTuple, Optional, Sequence

from .schemas import (
    DisplayLine,
    Operation,
    OpKind,
    RenderedAlignment,
    RenderOptions,
    Trace,
)

MATCH_SYMBOL = "|"
MISMATCH_SYMBOL = "."
GAP = "-"
BLANK = " "
RC_MARKER = " RC"


class Expansion(NamedTuple):
    query_row: str
    symbol_row: str
    reference_row: str
    query_end: int
    reference_end: int


def expand_operations(
    operations: Sequence[Operation],
    query: str,
    reference: str,
    query_pos: int,
    reference_pos: int,
) -> Expansion:
    """
    Render operations as three rows, starting at the given cursors.

    Bases are copied as stored, so the input case is preserved. Clips are
    padding only and never move a cursor.
    """
    query_row = []
    symbol_row = []
    reference_row = []

    for op in operations:
        kind = op.kind
        if kind is OpKind.MATCH or kind is OpKind.MISMATCH:
            query_row.append(query[query_pos])
            reference_row.append(reference[reference_pos])
            symbol_row.append(MATCH_SYMBOL if kind is OpKind.MATCH else MISMATCH_SYMBOL)
            query_pos += 1
            reference_pos += 1
        elif kind is OpKind.INSERTION:
            query_row.append(query[query_pos])
            symbol_row.append(BLANK)
            reference_row.append(GAP)
            query_pos += 1
        elif kind is OpKind.DELETION:
            query_row.append(GAP)
            symbol_row.append(BLANK)
            reference_row.append(reference[reference_pos])
            reference_pos += 1
        elif kind is OpKind.QUERY_CLIP:
            query_row.append(GAP * op.length)
            symbol_row.append(BLANK * op.length)
            reference_row.append(BLANK * op.length)
        elif kind is OpKind.REFERENCE_CLIP:
            query_row.append(BLANK * op.length)
            symbol_row.append(BLANK * op.length)
            reference_row.append(GAP * op.length)

    return Expansion(
        "".join(query_row),
        "".join(symbol_row),
        "".join(reference_row),
        query_pos,
        reference_pos,
    )


def chunk_trace(
    trace: Trace, query: str, reference: str, line_width: int
) -> list[DisplayLine]:
    """Split a trace into display lines of at most line_width operations each."""
    lines = []
    query_pos = trace.query_start
    reference_pos = trace.reference_start
    operations = trace.operations

    # A clip run counts as one operation however many columns it renders.
    for start in range(0, len(operations), line_width):
        expansion = expand_operations(
            operations[start:start + line_width],
            query,
            reference,
            query_pos,
            reference_pos,
        )
        lines.append(DisplayLine(
            query=expansion.query_row,
            symbols=expansion.symbol_row,
            reference=expansion.reference_row,
            query_start=query_pos,
            query_end=expansion.query_end,
            reference_start=reference_pos,
            reference_end=expansion.reference_end,
        ))
        query_pos = expansion.query_end
        reference_pos = expansion.reference_end

    return lines


def build_rendered_alignment(
    trace: Trace,
    query: str,
    reference: str,
    line_width: int,
    was_reverse_complemented: bool = False,
    query_length: Optional[int] = None,
) -> RenderedAlignment:
    if query_length is None:
        query_length = len(query)
    return RenderedAlignment(
        lines=tuple(chunk_trace(trace, query, reference, line_width)),
        was_reverse_complemented=was_reverse_complemented,
        query_length=query_length,
    )


def forward_coordinates(start: int, end: int, zero_based: bool) -> tuple[int, int]:
    return (start if zero_based else start + 1), end


def inverted_coordinates(
    start: int, end: int, length: int, zero_based: bool
) -> tuple[int, int]:
    """Map a range of the reverse complement back onto the original query numbering."""
    display_start = length - start
    display_end = length - end + 1
    if zero_based:
        display_end -= 1
    return display_start, display_end


def display_coordinates(
    line: DisplayLine, rendered: RenderedAlignment, zero_based: bool
) -> tuple[tuple[int, int], tuple[int, int]]:
    """Return ((query_start, query_end), (reference_start, reference_end)) as shown."""
    if rendered.was_reverse_complemented:
        query = inverted_coordinates(
            line.query_start, line.query_end, rendered.query_length, zero_based
        )
    else:
        query = forward_coordinates(line.query_start, line.query_end, zero_based)
    reference = forward_coordinates(line.reference_start, line.reference_end, zero_based)
    return query, reference


def format_alignment(rendered: RenderedAlignment, options: RenderOptions) -> str:
    """Render display lines as text blocks separated by a blank line."""
    if options.hide_coordinates:
        return "\n\n".join(
            "\n".join((line.query, line.symbols, line.reference))
            for line in rendered.lines
        )

    coordinates = [
        display_coordinates(line, rendered, options.zero_based_coordinates)
        for line in rendered.lines
    ]
    width = max(
        (len(str(start)) for query, reference in coordinates
         for start in (query[0], reference[0])),
        default=0,
    )
    padding = BLANK * width

    blocks = []
    for index, (line, (query, reference)) in enumerate(zip(rendered.lines, coordinates)):
        query_row = f"{query[0]:<{width}} {line.query} {query[1]}"
        if rendered.was_reverse_complemented and index == 0:
            query_row += RC_MARKER
        blocks.append("\n".join((
            query_row,
            f"{padding} {line.symbols}",
            f"{reference[0]:<{width}} {line.reference} {reference[1]}",
        )))
    return "\n\n".join(blocks)
