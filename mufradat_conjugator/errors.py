"""
Exceptions raised by the conjugation engine.

Precondition violations (bad root, unknown pattern, unknown irregularity)
fail fast. Lookup misses are never exceptions: they come back as None.
"""

from typing import List


class ConjugatorError(Exception):
    """Base class for all conjugation engine errors."""


class NonTriliteralRootError(ConjugatorError, ValueError):
    """The root does not reduce to exactly three letters."""

    def __init__(self, root, letters: List[str]):
        self.root = root
        self.letters = list(letters)
        super().__init__(
            f"Only triliteral roots are supported: {root!r} has "
            f"{len(self.letters)} letter(s)"
        )


class PatternNotFoundError(ConjugatorError, KeyError):
    """The pattern id is not one of form1..form10."""

    def __init__(self, pattern_id):
        self.pattern_id = pattern_id
        super().__init__(pattern_id)

    def __str__(self) -> str:
        return f"Unknown verb pattern: {self.pattern_id!r}"


class UnknownIrregularityError(ConjugatorError, ValueError):
    """An irregularity tag outside hollow/defective/doubled was requested."""

    def __init__(self, tag):
        self.tag = tag
        super().__init__(f"Unknown irregularity class: {tag!r}")


class RecordValidationError(ConjugatorError, ValueError):
    """A conjugation record failed structural validation."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class CacheBackendError(ConjugatorError):
    """The cache backend could not complete an operation."""
