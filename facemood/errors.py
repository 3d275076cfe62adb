"""
Exception types raised by the live pipeline.
"""


class FacemoodError(RuntimeError):
    """Base class for pipeline errors."""


class StartupError(FacemoodError):
    """A startup resource (cascade, model, labels) could not be loaded."""


class CameraUnavailableError(FacemoodError):
    """The capture device could not be opened (missing or permission denied)."""


class CollaboratorNotReady(FacemoodError):
    """A collaborator is still loading; the current tick should be skipped."""
