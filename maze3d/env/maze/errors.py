class MazeError(Exception):
    """Base class for maze generation errors."""


class InvalidDimensions(MazeError, ValueError):
    """Raised when a maze is requested with unusable dimensions."""


class ContractViolation(MazeError):
    """A caller broke the contract of a maze data structure (programmer bug)."""


class InvariantViolation(MazeError):
    """An internal invariant of the generator does not hold."""
