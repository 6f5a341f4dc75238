"""Custom exception hierarchy for layout generation."""


class LayoutError(Exception):
    """Base exception for layout engine failures."""


class EmptyWordListError(LayoutError):
    """Raised when generation is requested without any words."""


class InvalidWordError(LayoutError):
    """Raised when an input word is too short or contains whitespace."""


class DuplicateWordError(LayoutError):
    """Raised when the same word string appears more than once."""


class PlacementError(LayoutError):
    """Raised when a word is written over a conflicting letter."""


class ConfigError(LayoutError, ValueError):
    """Raised when generator or search settings are out of range."""


class GenerationCancelled(LayoutError):
    """Raised when a cancelled run has no completed attempt to report."""
