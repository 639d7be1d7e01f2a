from .base import BaseSource, Document
from .files import FileSource
from .web import WebSource

__all__ = [
    "BaseSource",
    "Document",
    "FileSource",
    "WebSource",
]
