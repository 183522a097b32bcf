import unittest
import sys
import os
import shutil
import tempfile
from pathlib import Path

# Add project root to sys.path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from docviewer.core.errors import DocumentAccessDenied, DocumentNotFound
from docviewer.core.indexer import (
    document_group,
    ensure_docs_dir,
    group_by_top_level,
    list_documents,
    read_document,
    resolve_document,
)


def write(root: Path, relative: str, content: str = "# Doc\n"):
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding='utf-8')
    return path


class TestListDocuments(unittest.TestCase):
    def setUp(self):
        self.test_dir = tempfile.mkdtemp()
        self.root = Path(self.test_dir) / 'docs'
        self.root.mkdir()

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def test_nested_documents_sorted(self):
        write(self.root, 'README.md')
        write(self.root, 'notes/ideas.md')
        write(self.root, 'notes/draft/todo.md')

        self.assertEqual(
            list_documents(self.root),
            ['README.md', 'notes/draft/todo.md', 'notes/ideas.md'],
        )

    def test_only_markdown_files_are_listed(self):
        write(self.root, 'a.md')
        write(self.root, 'b.txt')
        write(self.root, 'img/logo.png')
        write(self.root, 'deep/er/still/c.md')
        (self.root / 'empty').mkdir()

        self.assertEqual(list_documents(self.root), ['a.md', 'deep/er/still/c.md'])

    def test_each_document_listed_once(self):
        for rel in ['x.md', 'g1/x.md', 'g1/sub/x.md', 'g2/y.md']:
            write(self.root, rel)
        docs = list_documents(self.root)
        self.assertEqual(len(docs), 4)
        self.assertEqual(len(set(docs)), 4)

    def test_sorted_and_deterministic(self):
        for rel in ['zeta.md', 'Alpha.md', 'm/b.md', 'm/a.md', 'b/c.md']:
            write(self.root, rel)
        first = list_documents(self.root)
        self.assertEqual(first, sorted(first))
        self.assertEqual(first, list_documents(self.root))

    def test_missing_root_returns_empty(self):
        self.assertEqual(list_documents(self.root / 'nope'), [])

    def test_root_is_a_file_returns_empty(self):
        path = write(self.root, 'file.md')
        self.assertEqual(list_documents(path), [])

    def test_empty_root(self):
        self.assertEqual(list_documents(self.root), [])

    def test_symlinked_directory_not_followed(self):
        outside = Path(self.test_dir) / 'outside'
        write(outside, 'secret.md')
        try:
            os.symlink(outside, self.root / 'linked', target_is_directory=True)
        except (OSError, NotImplementedError):
            self.skipTest("symlinks not supported")
        self.assertEqual(list_documents(self.root), [])


class TestGrouping(unittest.TestCase):
    def test_document_group(self):
        self.assertEqual(document_group('README.md'), 'Root')
        self.assertEqual(document_group('notes/ideas.md'), 'notes')
        self.assertEqual(document_group('notes/draft/todo.md'), 'notes')

    def test_group_by_top_level(self):
        paths = ['README.md', 'notes/draft/todo.md', 'notes/ideas.md']
        groups = group_by_top_level(paths)

        self.assertEqual(list(groups), ['All', 'Root', 'notes'])
        self.assertEqual(groups['All'], paths)
        self.assertEqual(groups['Root'], ['README.md'])
        self.assertEqual(groups['notes'], ['notes/draft/todo.md', 'notes/ideas.md'])

    def test_root_group_omitted_when_empty(self):
        groups = group_by_top_level(['a/x.md', 'b/y.md'])
        self.assertEqual(list(groups), ['All', 'a', 'b'])

    def test_empty_index_keeps_all_group(self):
        self.assertEqual(group_by_top_level([]), {'All': []})

    def test_all_count_matches_total(self):
        paths = ['a.md', 'x/b.md', 'x/c.md', 'y/d.md']
        groups = group_by_top_level(paths)
        self.assertEqual(len(groups['All']), len(paths))
        members = sum(len(v) for k, v in groups.items() if k != 'All')
        self.assertEqual(members, len(paths))

    def test_folder_named_all_is_not_counted_twice(self):
        paths = ['All/x.md', 'a.md']
        groups = group_by_top_level(paths)
        self.assertEqual(groups['All'], paths)
        self.assertEqual(len(groups['All']), 2)
        self.assertEqual(groups['Root'], ['a.md'])

    def test_folder_named_root_shares_root_group(self):
        paths = ['Root/y.md', 'a.md', 'b/c.md']
        groups = group_by_top_level(paths)
        self.assertEqual(list(groups), ['All', 'Root', 'b'])
        self.assertEqual(groups['Root'], ['Root/y.md', 'a.md'])
        self.assertEqual(len(groups['All']), 3)


class TestResolveDocument(unittest.TestCase):
    def setUp(self):
        self.test_dir = tempfile.mkdtemp()
        self.root = Path(self.test_dir) / 'docs'
        self.root.mkdir()
        write(self.root, 'README.md', '# Hi\n')
        write(self.root, 'notes/ideas.md', 'ideas')
        write(Path(self.test_dir), 'secret.md', 'top secret')

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def test_resolves_nested_document(self):
        path = resolve_document(self.root, 'notes/ideas.md')
        self.assertEqual(path, (self.root / 'notes' / 'ideas.md').resolve())

    def test_traversal_is_denied(self):
        for attempt in ['../secret.md', 'notes/../../secret.md', '../../etc/passwd', '/etc/passwd']:
            with self.subTest(attempt=attempt):
                with self.assertRaises(DocumentAccessDenied):
                    resolve_document(self.root, attempt)

    def test_dot_segments_inside_root_are_allowed(self):
        path = resolve_document(self.root, 'notes/../README.md')
        self.assertEqual(path.name, 'README.md')

    def test_missing_document(self):
        with self.assertRaises(DocumentNotFound):
            resolve_document(self.root, 'missing.md')

    def test_directory_is_not_a_document(self):
        with self.assertRaises(DocumentNotFound):
            resolve_document(self.root, 'notes')

    def test_unusable_names_are_not_found(self):
        for name in ['a' * 5000 + '.md', 'a\x00b.md']:
            with self.subTest(length=len(name)):
                with self.assertRaises(DocumentNotFound):
                    resolve_document(self.root, name)

    def test_read_document(self):
        self.assertEqual(read_document(self.root, 'README.md'), '# Hi\n')

    def test_read_invalid_utf8_propagates(self):
        (self.root / 'bad.md').write_bytes(b'\xff\xfe\xfa')
        with self.assertRaises(UnicodeDecodeError):
            read_document(self.root, 'bad.md')


class TestEnsureDocsDir(unittest.TestCase):
    def setUp(self):
        self.test_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def test_creates_and_is_idempotent(self):
        root = Path(self.test_dir) / 'a' / 'docs'
        self.assertTrue(ensure_docs_dir(root))
        self.assertTrue(root.is_dir())
        self.assertTrue(ensure_docs_dir(root))

    def test_failure_is_reported_not_raised(self):
        blocker = Path(self.test_dir) / 'blocker'
        blocker.write_text('x')
        self.assertFalse(ensure_docs_dir(blocker / 'docs'))


if __name__ == '__main__':
    unittest.main()
