"""
Visibility rules for the document list.

This is the same predicate the browser runs in static/js/filter.js; the
server uses it for /api/search.
"""

from dataclasses import dataclass
from typing import Iterable, List

from docviewer.core.indexer import ALL_GROUP, ROOT_GROUP
from docviewer.core.presentation import DocumentEntry


@dataclass(frozen=True)
class FilterState:
    selected_group: str = ALL_GROUP
    search_text: str = ''

    def __post_init__(self):
        object.__setattr__(self, 'search_text', (self.search_text or '').strip().lower())
        object.__setattr__(self, 'selected_group', self.selected_group or ALL_GROUP)


def group_matches(entry: DocumentEntry, state: FilterState) -> bool:
    if state.selected_group == ALL_GROUP:
        return True
    if state.selected_group == ROOT_GROUP:
        return entry.group == ROOT_GROUP
    return entry.group == state.selected_group


def search_matches(entry: DocumentEntry, state: FilterState) -> bool:
    term = state.search_text
    return not term or term in entry.filename_key or term in entry.path_key


def compute_visibility(entry: DocumentEntry, state: FilterState) -> bool:
    return group_matches(entry, state) and search_matches(entry, state)


def filter_entries(entries: Iterable[DocumentEntry], state: FilterState) -> List[DocumentEntry]:
    return [entry for entry in entries if compute_visibility(entry, state)]
