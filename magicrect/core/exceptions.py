"""Custom exception hierarchy for magic rectangle generation."""


class MagicRectangleError(Exception):
    """Base exception for setup and engine failures."""


class DictionaryLoadError(MagicRectangleError):
    """Raised when the word list cannot be read."""


class EmptyDictionary(DictionaryLoadError):
    """Raised when no usable words were supplied."""


class InvalidShape(MagicRectangleError):
    """Raised when the rectangle dimensions or template width are inconsistent."""


class InvalidTemplate(InvalidShape):
    """Raised when a template contains unusable characters or conflicting letters."""


class FixedCellViolation(MagicRectangleError):
    """Raised when a template-fixed cell is reassigned."""


class ValidationError(MagicRectangleError):
    """Raised when a finished grid fails its integrity checks."""
