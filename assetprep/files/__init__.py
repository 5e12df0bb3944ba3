"""Files, file collections and transformation strategies."""

from assetprep.files.collection import FileCollection
from assetprep.files.file import File
from assetprep.files.gzipped import GzippedFile
from assetprep.files.strategy import Strategy, parse_strategies

__all__ = [
    "File",
    "GzippedFile",
    "FileCollection",
    "Strategy",
    "parse_strategies",
]
