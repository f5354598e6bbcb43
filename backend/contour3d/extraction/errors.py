# backend/contour3d/extraction/errors.py


class ContourExtractionError(Exception):
    """Base class for everything the extraction pipeline raises on purpose."""


class DimensionMismatch(ContourExtractionError, ValueError):
    """Position and color inputs do not describe the same width x height grid."""


class NoContourFound(ContourExtractionError):
    """The normalized mask has no boundary to trace."""


class IOFailure(ContourExtractionError, OSError):
    """An output artifact could not be written."""

    def __init__(self, path, reason):
        self.path = str(path)
        self.reason = reason
        super().__init__(f"could not write {self.path}: {reason}")


class ConfigError(ContourExtractionError, ValueError):
    pass


class PointMapError(ContourExtractionError):
    """A saved point map archive is unreadable or incomplete."""
