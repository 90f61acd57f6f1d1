"""Sequence normalization, validation and nucleotide transforms."""
from typing import Iterable

from Bio.Seq import Seq

from .errors import EmptySequence, EncodingFailure, InvalidBase

VALID_BASES = frozenset("ACGTUacgtu")
GC_BASES = "GC"
AT_BASES = "ATU"
IGNORED_BY_LENGTH = "- "


def join_fragments(fragments: Iterable[str]) -> str:
    """Join command-line fragments into one sequence, dropping whitespace."""
    return "".join("".join(fragment.split()) for fragment in fragments)


def validate_sequence(sequence: str) -> str:
    """Return the sequence unchanged, or raise InvalidBase at the first bad character."""
    for position, base in enumerate(sequence):
        if base not in VALID_BASES:
            raise InvalidBase(base, position)
    return sequence


def _to_seq(sequence: str) -> Seq:
    return Seq(validate_sequence(sequence).encode("ascii"))


def _to_text(data: bytes) -> str:
    try:
        return data.decode("ascii")
    except UnicodeDecodeError as exc:
        raise EncodingFailure(f"transform produced invalid text: {exc}") from exc


def _is_rna(sequence: str) -> bool:
    """RNA when U appears and T does not; mixed T/U input is read as DNA."""
    letters = set(sequence.upper())
    return "U" in letters and "T" not in letters


def reverse_complement(sequence: str) -> str:
    """Reverse-complement a nucleotide sequence, keeping the case of each base."""
    seq = _to_seq(sequence)
    if _is_rna(sequence):
        return _to_text(bytes(seq.reverse_complement_rna()))
    return _to_text(bytes(seq.reverse_complement()))


def complement(sequence: str) -> str:
    seq = _to_seq(sequence)
    if _is_rna(sequence):
        return _to_text(bytes(seq.complement_rna()))
    return _to_text(bytes(seq.complement()))


def sequence_length(sequence: str) -> int:
    """Count bases, ignoring gap dashes and spaces."""
    bases = sequence.translate(str.maketrans("", "", IGNORED_BY_LENGTH))
    return len(validate_sequence(bases))


def gc_content(sequence: str) -> float:
    """
    Fraction of G/C among all A/C/G/T/U bases.

    A sequence with none of those bases has no defined ratio and is rejected
    with EmptySequence.
    """
    bases = validate_sequence(sequence).upper()
    gc = sum(bases.count(base) for base in GC_BASES)
    at = sum(bases.count(base) for base in AT_BASES)
    if gc + at == 0:
        raise EmptySequence("cannot compute GC content of a sequence without A/C/G/T/U bases")
    return gc / (gc + at)
