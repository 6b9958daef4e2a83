"""Safe navigation of variable-width (UTF-8) text by byte position."""
from .errors import EncodingError, InvalidPositionError, TextSeqError
from .models import NOT_FOUND, CharStep, Found, NotFound, Position, PositionFault, SearchResult
from .sequence import TextSequence
from .version import __version__

__all__ = [
    "TextSequence",
    "Position",
    "PositionFault",
    "CharStep",
    "Found",
    "NotFound",
    "NOT_FOUND",
    "SearchResult",
    "TextSeqError",
    "EncodingError",
    "InvalidPositionError",
    "__version__",
]
