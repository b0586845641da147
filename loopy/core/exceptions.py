"""Custom exception hierarchy for the loop puzzle engine.

Puzzle unsatisfiability is reported through ``Status.UNSOLVABLE`` and never
raised; these exceptions cover malformed input and broken internal
bookkeeping.
"""


class LoopyError(Exception):
    """Base exception for engine failures."""


class PuzzleFormatError(LoopyError):
    """Raised when a hint grid or its text form is malformed."""


class GeometryError(LoopyError):
    """Raised when coordinate bookkeeping reaches an impossible state."""


class GenerationError(LoopyError):
    """Raised when the generator cannot produce a uniquely solvable puzzle."""


class ValidationError(LoopyError):
    """Raised when a finished board breaks a loop or hint rule."""
