"""notebuild — turn a folder of markdown notes into a JSON data file."""

__version__ = "0.1.0"
