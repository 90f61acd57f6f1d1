"""Errors reported to users by the command line and the HTTP API."""


class BiotoolsError(ValueError):
    """Base class for handled application errors."""


class InvalidSequenceCount(BiotoolsError):
    def __init__(self, count: int, expected: int = 2) -> None:
        self.count = count
        self.expected = expected
        super().__init__(f"expected exactly {expected} sequences, got {count}")


class InvalidBase(BiotoolsError):
    """A character outside the nucleotide alphabet; position is 0-based."""

    def __init__(self, base: str, position: int) -> None:
        self.base = base
        self.position = position
        super().__init__(f"invalid base {base!r} at position {position + 1}")


class EncodingFailure(BiotoolsError):
    """A sequence transform produced bytes that are not valid text."""


class EmptySequence(BiotoolsError):
    """A sequence has no bases to work with."""
