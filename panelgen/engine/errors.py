class OutOfBoundsError(IndexError):
    """A coordinate lies outside the grid it was looked up in."""


class InvalidPathError(ValueError):
    """A path handed to the validator is malformed (caller error)."""


class PanelGenerationError(RuntimeError):
    """A panel source returned nothing usable."""
