from biotools.render import (
    build_rendered_alignment,
    chunk_trace,
    expand_operations,
    format_alignment,
    inverted_coordinates,
)
from biotools.schemas import (
    MATCH,
    RenderOptions,
    Trace,
    query_clip,
    reference_clip,
)


def test_expand_operations_for_each_base_operation(make_trace):
    trace = make_trace("MXID")
    expansion = expand_operations(trace.operations, "ACG", "ATC", 0, 0)

    assert expansion.query_row == "ACG-"
    assert expansion.symbol_row == "|.  "
    assert expansion.reference_row == "AT-C"
    assert (expansion.query_end, expansion.reference_end) == (3, 3)


def test_expand_operations_keeps_stored_case(make_trace):
    expansion = expand_operations(make_trace("MMM").operations, "acg", "ACG", 0, 0)
    assert expansion.query_row == "acg"
    assert expansion.reference_row == "ACG"


def test_clips_are_padding_and_do_not_move_cursors():
    operations = [query_clip(3), MATCH, reference_clip(2), query_clip(0)]
    expansion = expand_operations(operations, "A", "A", 0, 0)

    assert expansion.query_row == "---A  "
    assert expansion.symbol_row == "   |  "
    assert expansion.reference_row == "   A--"
    assert (expansion.query_end, expansion.reference_end) == (1, 1)


def test_chunk_trace_splits_by_operation_count(make_trace):
    lines = chunk_trace(make_trace("MMIMM"), "ACAGT", "ACGT", 2)

    assert [line.query for line in lines] == ["AC", "AG", "T"]
    assert [line.symbols for line in lines] == ["||", " |", "|"]
    assert [line.reference for line in lines] == ["AC", "-G", "T"]
    assert [(line.query_start, line.query_end) for line in lines] == [(0, 2), (2, 4), (4, 5)]
    assert [(line.reference_start, line.reference_end) for line in lines] == [
        (0, 2), (2, 3), (3, 4)
    ]


def test_consecutive_lines_are_contiguous(make_trace):
    query = "ACGTACGTACGTAAAA"
    reference = "ACGAACGTTACGTAAA"
    trace = make_trace("MMMXMMMMDMIMMMMMM", query_start=0, reference_start=0)
    lines = chunk_trace(trace, query, reference, 4)

    for previous, current in zip(lines, lines[1:]):
        assert current.query_start == previous.query_end
        assert current.reference_start == previous.reference_end
    assert lines[-1].query_end == trace.query_end
    assert lines[-1].reference_end == trace.reference_end


def test_clip_run_counts_as_one_operation():
    trace = Trace(operations=(query_clip(5), MATCH), query_end=1, reference_end=1)
    lines = chunk_trace(trace, "A", "A", 1)

    assert [line.query for line in lines] == ["-----", "A"]


def test_format_hides_coordinates(make_trace):
    rendered = build_rendered_alignment(make_trace("MMIMM"), "ACAGT", "ACGT", 2)
    text = format_alignment(rendered, RenderOptions(hide_coordinates=True))

    assert text == "AC\n||\nAC\n\nAG\n |\n-G\n\nT\n|\nT"


def test_format_uses_one_based_starts_by_default(make_trace):
    rendered = build_rendered_alignment(make_trace("MMIMM"), "ACAGT", "ACGT", 60)
    assert format_alignment(rendered, RenderOptions()) == "1 ACAGT 5\n  || ||\n1 AC-GT 4"


def test_format_pads_start_coordinates_to_common_width(make_trace):
    trace = make_trace("MM", query_start=8, reference_start=10)
    rendered = build_rendered_alignment(trace, "A" * 10, "A" * 12, 60)
    text = format_alignment(rendered, RenderOptions(zero_based_coordinates=True))

    assert text == "8  AA 10\n   ||\n10 AA 12"


def test_reverse_complement_coordinates_are_inverted(make_trace):
    trace = make_trace("MMMMMMM", reference_start=3)
    rendered = build_rendered_alignment(
        trace, "GATTACA", "GGCGATTACAATGACA", 60, was_reverse_complemented=True
    )

    zero_based = format_alignment(rendered, RenderOptions(zero_based_coordinates=True))
    one_based = format_alignment(rendered, RenderOptions())

    assert zero_based == "7 GATTACA 0 RC\n  |||||||\n3 GATTACA 10"
    assert one_based == "7 GATTACA 1 RC\n  |||||||\n4 GATTACA 10"


def test_rc_marker_only_on_first_line(make_trace):
    trace = make_trace("MMMMMMM", reference_start=3)
    rendered = build_rendered_alignment(
        trace, "GATTACA", "GGCGATTACAATGACA", 4, was_reverse_complemented=True
    )
    text = format_alignment(rendered, RenderOptions(zero_based_coordinates=True))

    assert text == "7 GATT 3 RC\n  ||||\n3 GATT 7\n\n3 ACA 0\n  |||\n7 ACA 10"


def test_rc_marker_hidden_with_coordinates(make_trace):
    rendered = build_rendered_alignment(
        make_trace("MM"), "AC", "AC", 60, was_reverse_complemented=True
    )
    assert format_alignment(rendered, RenderOptions(hide_coordinates=True)) == "AC\n||\nAC"


def test_inverted_coordinates():
    assert inverted_coordinates(0, 7, 7, zero_based=False) == (7, 1)
    assert inverted_coordinates(0, 7, 7, zero_based=True) == (7, 0)
    assert inverted_coordinates(2, 5, 10, zero_based=False) == (8, 6)


def test_empty_trace_renders_nothing():
    rendered = build_rendered_alignment(Trace(), "ACGT", "ACGT", 60)
    assert rendered.lines == ()
    assert format_alignment(rendered, RenderOptions()) == ""
