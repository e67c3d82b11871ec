"""Custom exception hierarchy for the crossword builder."""


class CrosswordBuilderError(Exception):
    """Base exception for builder failures."""


class ProjectFormatError(CrosswordBuilderError):
    """Raised when a persisted project document is malformed."""


class StorageError(CrosswordBuilderError):
    """Raised when a project or session store cannot be read or written."""


class ProjectNotFoundError(CrosswordBuilderError):
    """Raised when a project id does not exist in the store."""
