"""Error types raised by the decomposition plotting pipeline.

Each stage reports its own failure synchronously: alignment raises
DataShapeError, composition raises MissingChannelError and export raises
ExportError. Nothing is retried internally.
"""

from pathlib import Path
from typing import Mapping, Optional, Union


class StlPlotError(Exception):
    """Base class for plotting pipeline errors."""

    pass


class DataShapeError(StlPlotError):
    """Input sequences are empty or do not share one length."""

    def __init__(self, lengths: Optional[Mapping[str, int]] = None, message: Optional[str] = None):
        self.lengths = dict(lengths or {})
        if message is None:
            if len(set(self.lengths.values())) <= 1:
                message = "Decomposition result is empty"
            else:
                detail = ", ".join(f"{name}={size}" for name, size in self.lengths.items())
                message = f"Decomposition channels differ in length ({detail})"
        super().__init__(message)


class MissingChannelError(StlPlotError):
    """A panel references a channel that alignment did not produce."""

    def __init__(self, channel: str):
        self.channel = channel
        super().__init__(f"Channel not available for plotting: {channel}")


class ExportError(StlPlotError):
    """Writing the rendered image failed.

    The original exception is kept on ``cause`` and chained as
    ``__cause__``; the figure itself is untouched and may be exported
    again to another destination.
    """

    def __init__(self, destination: Union[str, Path, object], cause: BaseException):
        self.destination = destination
        self.cause = cause
        super().__init__(f"Failed to export chart to {destination}: {cause}")
