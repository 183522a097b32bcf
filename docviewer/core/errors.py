"""Domain errors raised while resolving documents under the docs root."""


class DocViewerError(Exception):
    """Base class for document lookup failures."""


class DocumentNotFound(DocViewerError):
    def __init__(self, relative_path: str):
        super().__init__(f"Document not found: {relative_path}")
        self.relative_path = relative_path


class DocumentAccessDenied(DocViewerError):
    """The requested path resolves outside the docs root."""

    def __init__(self, relative_path: str):
        super().__init__(f"Access denied: {relative_path}")
        self.relative_path = relative_path
