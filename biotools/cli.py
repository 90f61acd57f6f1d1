"""Command-line interface for biotools.

Single-sequence commands join their fragments into one sequence and print a
single line. Pairwise commands take exactly two sequences (query, then
reference) and print a rendered alignment.

Usage:
    biotools reverse-complement GATTACA
    biotools gc-content GATT ACA
    biotools pairwise-local --try-rc TGTAATC GGCGATTACAATGACA
"""
import logging
import sys

import click

from . import sequences
from .alignment import align_sequences
from .config import settings
from .errors import BiotoolsError
from .schemas import AlignmentMode, RenderOptions, ScoringScheme

LOGGER = logging.getLogger(__name__)

ERROR_EXIT_CODE = 47
ERROR_PREFIX = "biotools error: "


def _report(func, *args) -> None:
    """Print the result of func, or a one-line diagnostic and exit 47."""
    try:
        result = func(*args)
    except BiotoolsError as exc:
        click.echo(f"{ERROR_PREFIX}{exc}", err=True)
        sys.exit(ERROR_EXIT_CODE)
    click.echo(result)


@click.group(
    context_settings={"help_option_names": ["-h", "--help"]},
    help="Small nucleotide sequence utilities and pairwise alignment viewer.",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose logging.")
def main(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(level=logging.INFO, force=True)
    else:
        level = getattr(logging, settings.LOG_LEVEL.upper(), logging.WARNING)
        logging.basicConfig(level=level, force=True)


fragments_argument = click.argument("fragments", nargs=-1, required=True)


@main.command("reverse-complement")
@fragments_argument
def reverse_complement_command(fragments: tuple[str, ...]) -> None:
    """Print the reverse complement of a sequence."""
    _report(sequences.reverse_complement, sequences.join_fragments(fragments))


@main.command("complement")
@fragments_argument
def complement_command(fragments: tuple[str, ...]) -> None:
    """Print the complement of a sequence, without reversing it."""
    _report(sequences.complement, sequences.join_fragments(fragments))


@main.command("length")
@fragments_argument
def length_command(fragments: tuple[str, ...]) -> None:
    """Print the number of bases, ignoring '-' gap characters."""
    _report(sequences.sequence_length, sequences.join_fragments(fragments))


@main.command("gc-content")
@fragments_argument
def gc_content_command(fragments: tuple[str, ...]) -> None:
    """Print the G/C fraction of a sequence."""
    _report(sequences.gc_content, sequences.join_fragments(fragments))


def pairwise_options(func):
    """Attach the arguments and options shared by the pairwise commands."""
    decorators = [
        click.argument("sequences_", metavar="QUERY REFERENCE", nargs=-1, required=True),
        click.option(
            "--gap-open",
            type=click.IntRange(min=0),
            default=settings.GAP_OPEN,
            show_default=True,
            help="Penalty for opening a gap.",
        ),
        click.option(
            "--gap-extend",
            type=click.IntRange(min=0),
            default=settings.GAP_EXTEND,
            show_default=True,
            help="Penalty for each further position of a gap.",
        ),
        click.option("--hide-coords", is_flag=True, help="Do not print coordinates."),
        click.option(
            "--try-rc",
            is_flag=True,
            help="Also align the reverse complement of the query and keep the better one.",
        ),
        click.option(
            "--line-width",
            type=click.IntRange(min=1),
            default=settings.LINE_WIDTH,
            show_default=True,
            help="Maximum number of alignment operations per line.",
        ),
        click.option(
            "--use-0-based-coords",
            is_flag=True,
            help="Print 0-based instead of 1-based start coordinates.",
        ),
    ]
    for decorator in reversed(decorators):
        func = decorator(func)
    return func


def _run_pairwise(
    mode: AlignmentMode,
    sequences_: tuple[str, ...],
    gap_open: int,
    gap_extend: int,
    hide_coords: bool,
    try_rc: bool,
    line_width: int,
    use_0_based_coords: bool,
) -> None:
    LOGGER.info(
        "Starting %s alignment (gap open %d, gap extend %d, try rc %s)",
        mode.value, gap_open, gap_extend, try_rc,
    )
    scoring = ScoringScheme.from_penalties(
        gap_open,
        gap_extend,
        match_score=settings.MATCH_SCORE,
        mismatch_score=settings.MISMATCH_SCORE,
    )
    options = RenderOptions(
        hide_coordinates=hide_coords,
        try_reverse_complement=try_rc,
        line_width=line_width,
        zero_based_coordinates=use_0_based_coords,
    )
    _report(lambda: align_sequences(sequences_, mode, scoring, options).text)


@main.command("pairwise-local")
@pairwise_options
def pairwise_local(**kwargs) -> None:
    """Local (Smith-Waterman) alignment of QUERY against REFERENCE."""
    _run_pairwise(AlignmentMode.LOCAL, **kwargs)


@main.command("pairwise-semiglobal")
@pairwise_options
def pairwise_semiglobal(**kwargs) -> None:
    """Semiglobal alignment: all of QUERY, with free REFERENCE overhang."""
    _run_pairwise(AlignmentMode.SEMIGLOBAL, **kwargs)


@main.command("pairwise-global")
@pairwise_options
def pairwise_global(**kwargs) -> None:
    """Global (Needleman-Wunsch) alignment of QUERY against REFERENCE."""
    _run_pairwise(AlignmentMode.GLOBAL, **kwargs)


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    main()
