"""
Directory indexer: finds Markdown documents under the docs root and groups
them by top-level folder.
"""

import logging
import os
from pathlib import Path
from typing import Dict, List, Union

from docviewer.config import DOCUMENT_EXTENSION
from docviewer.core.errors import DocumentAccessDenied, DocumentNotFound

logger = logging.getLogger(__name__)

ALL_GROUP = 'All'
ROOT_GROUP = 'Root'

PathLike = Union[str, Path]


def ensure_docs_dir(root: PathLike) -> bool:
    """Create the docs root if missing. Never raises."""
    try:
        Path(root).mkdir(parents=True, exist_ok=True)
        return True
    except OSError as e:
        logger.error(f"Error creating docs directory {root}: {e}")
        return False


def list_documents(root: PathLike, extension: str = DOCUMENT_EXTENSION) -> List[str]:
    """
    Return every document under ``root`` as a sorted list of forward-slash
    relative paths.

    A missing or unreadable root yields an empty list. Unreadable
    subdirectories are skipped. Symlinked directories are not descended into.
    """
    documents: List[str] = []
    # (absolute dir, relative prefix) pairs still to visit
    stack = [(Path(root), '')]

    while stack:
        directory, prefix = stack.pop()
        try:
            with os.scandir(directory) as it:
                entries = list(it)
        except OSError as e:
            if prefix:
                logger.warning(f"Skipping unreadable directory {directory}: {e}")
            else:
                logger.debug(f"Docs root {directory} not readable: {e}")
            continue

        for entry in entries:
            rel_path = f"{prefix}{entry.name}"
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError:
                continue
            if is_dir:
                stack.append((Path(entry.path), f"{rel_path}/"))
            elif entry.name.endswith(extension):
                documents.append(rel_path)

    documents.sort()
    logger.debug(f"Indexed {len(documents)} documents under {root}")
    return documents


def document_group(relative_path: str) -> str:
    """First path segment, or 'Root' for files directly under the docs root."""
    if '/' in relative_path:
        return relative_path.split('/', 1)[0]
    return ROOT_GROUP


def group_by_top_level(paths: List[str]) -> Dict[str, List[str]]:
    """
    Group paths by their top-level folder.

    'All' always comes first and holds every path; 'Root' follows when it
    has members, then each folder in first-seen order. Groups keep the input
    order.

    A folder named 'All' only shows up under the synthetic group, and a
    folder named 'Root' shares the root-level group.
    """
    by_folder: Dict[str, List[str]] = {}
    for path in paths:
        by_folder.setdefault(document_group(path), []).append(path)

    groups: Dict[str, List[str]] = {ALL_GROUP: list(paths)}
    if ROOT_GROUP in by_folder:
        groups[ROOT_GROUP] = by_folder.pop(ROOT_GROUP)
    for name, members in by_folder.items():
        if name != ALL_GROUP:
            groups[name] = members
    return groups


def resolve_document(root: PathLike, relative_path: str) -> Path:
    """
    Resolve ``relative_path`` against ``root``.

    Raises DocumentAccessDenied if the result escapes the root and
    DocumentNotFound if it is not an existing regular file.
    """
    root_path = Path(root).resolve()
    try:
        candidate = (root_path / relative_path).resolve()
    except (OSError, ValueError):
        # Over-long names, embedded NUL bytes
        raise DocumentNotFound(relative_path)

    try:
        candidate.relative_to(root_path)
    except ValueError:
        logger.warning(f"Attempted path traversal: {relative_path}")
        raise DocumentAccessDenied(relative_path)

    try:
        is_file = candidate.is_file()
    except (OSError, ValueError):
        is_file = False
    if not is_file:
        raise DocumentNotFound(relative_path)
    return candidate


def read_document(root: PathLike, relative_path: str) -> str:
    """
    Read a document's text as UTF-8.

    Lookup failures raise the domain errors above; any other I/O or decoding
    failure propagates unchanged.
    """
    file_path = resolve_document(root, relative_path)
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            return f.read()
    except (FileNotFoundError, IsADirectoryError):
        # Removed between the lookup and the read
        raise DocumentNotFound(relative_path)
