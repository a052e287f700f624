"""Exceptions specific to the chain solver."""


class IKError(Exception):
    """Base class for chain solver exceptions."""


class InvalidChain(IKError):
    """Exception raised when joint positions cannot form a chain."""

    def __init__(self, message: str):
        super().__init__(message)


class DegenerateSegment(IKError):
    """Exception raised when two consecutive joints coincide."""

    def __init__(self, index: int, message: str = ""):
        self.index = index
        detail = f" {message}" if message else ""
        super().__init__(f"Segment {index} has zero length; direction is undefined.{detail}")


class NoSnapshot(IKError):
    """Exception raised when a reset is requested without an initial snapshot."""

    def __init__(self):
        super().__init__("Chain has no initial snapshot to reset to.")


class UnsupportedClassification(IKError):
    """Exception raised when a pose discrepancy has no correction strategy yet."""

    def __init__(self, discrepancy):
        self.discrepancy = discrepancy
        super().__init__(f"No correction strategy implemented for {discrepancy}.")


class MissingPreview(IKError):
    """Exception raised when an operation needs a preview chain that does not exist."""

    def __init__(self, operation: str):
        super().__init__(f"{operation} requires a committed preview chain.")


class InvalidTarget(IKError):
    """Exception raised when a joint target is invalid."""

    def __init__(self, message: str):
        super().__init__(message)


class InvalidIterations(IKError):
    """Exception raised when the iteration count is not a positive integer."""

    def __init__(self, iterations):
        super().__init__(f"Iterations must be a positive integer, got {iterations!r}.")
