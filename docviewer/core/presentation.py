"""
Template context for the index and document pages.

The Jinja templates in docviewer/templates only lay out what is built here,
so everything the browser filter relies on (tab names, counts, per-entry
filter keys) can be checked without rendering HTML.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List

from docviewer.core.indexer import ALL_GROUP, ROOT_GROUP, document_group, group_by_top_level
from docviewer.core.links import document_url
from docviewer.core.renderer import highlight_stylesheet

logger = logging.getLogger(__name__)

APP_TITLE = 'Document Viewer'
NO_DOCUMENTS_MESSAGE = 'No markdown files found. Add some .md files to the docs/ directory!'
NO_RESULTS_MESSAGE = 'No documents found matching your search criteria.'


@dataclass(frozen=True)
class DocumentEntry:
    path: str
    name: str
    group: str
    filename_key: str
    path_key: str
    url: str

    @classmethod
    def from_path(cls, relative_path: str) -> "DocumentEntry":
        name = relative_path.rsplit('/', 1)[-1]
        return cls(
            path=relative_path,
            name=name,
            group=document_group(relative_path),
            filename_key=name.lower(),
            path_key=relative_path.lower(),
            url=document_url(relative_path),
        )

    @property
    def nested(self) -> bool:
        return '/' in self.path

    def to_dict(self) -> Dict[str, Any]:
        return {
            'path': self.path,
            'name': self.name,
            'group': self.group,
            'url': self.url,
        }


def tab_label(group: str) -> str:
    if group == ALL_GROUP:
        return f'📚 {ALL_GROUP}'
    if group == ROOT_GROUP:
        return f'📁 {ROOT_GROUP}'
    return f'📂 {group}'


def build_tabs(groups: Dict[str, List[str]]) -> List[Dict[str, Any]]:
    return [
        {
            'name': name,
            'label': tab_label(name),
            'count': len(members),
            'active': index == 0,
        }
        for index, (name, members) in enumerate(groups.items())
    ]


def build_index_context(paths: List[str]) -> Dict[str, Any]:
    groups = group_by_top_level(paths)
    entries = [DocumentEntry.from_path(p) for p in paths]
    logger.debug(f"Index context: {len(entries)} entries in {len(groups)} tabs")
    return {
        'title': APP_TITLE,
        'tabs': build_tabs(groups),
        'entries': entries,
        'total': len(entries),
        'no_documents_message': NO_DOCUMENTS_MESSAGE,
        'no_results_message': NO_RESULTS_MESSAGE,
    }


def build_document_context(relative_path: str, html_content: str) -> Dict[str, Any]:
    return {
        'title': relative_path,
        'file_name': relative_path,
        'content': html_content,
        'highlight_css': highlight_stylesheet(),
    }
