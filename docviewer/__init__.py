"""DocViewer - browse a folder of Markdown documents in the browser."""

from docviewer.version_info import __version__

__all__ = ["__version__"]
