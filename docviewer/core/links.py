import logging
from pathlib import Path
from urllib.parse import quote, unquote, urlsplit

from bs4 import BeautifulSoup

from docviewer.config import DOCUMENT_EXTENSION

logger = logging.getLogger(__name__)

EXTERNAL_SCHEMES = ('http://', 'https://')


def document_url(relative_path: str) -> str:
    return '/doc/' + quote(relative_path, safe='')


def process_links_in_html(html_content: str, docs_root: Path, document_path: str,
                          extension: str = DOCUMENT_EXTENSION) -> str:
    """
    Make links in a rendered document usable from the viewer.

    - External links open in a new tab
    - Relative links to documents under the docs root point at /doc/<path>
    - Relative links to other files (images, attachments) are left as-is
    - mailto:, anchors and absolute paths are left as-is
    """
    try:
        soup = BeautifulSoup(html_content, 'html.parser')
        root = Path(docs_root).resolve()
        base_dir = (root / document_path).parent

        for a_tag in soup.find_all('a'):
            href = a_tag.get('href', '')
            if not href:
                continue

            if href.startswith(EXTERNAL_SCHEMES):
                a_tag['target'] = '_blank'
                a_tag['rel'] = 'noopener noreferrer'
                continue

            if href.startswith(('mailto:', '#', '/')) or urlsplit(href).scheme:
                continue

            parts = urlsplit(href)
            try:
                resolved = (base_dir / unquote(parts.path)).resolve()
                rel_path = resolved.relative_to(root).as_posix()
            except (ValueError, OSError):
                logger.debug(f"Link {href} in {document_path} points outside the docs root")
                continue

            if not resolved.is_file():
                logger.warning(f"Broken link in {document_path}: {href}")
                a_tag['class'] = (a_tag.get('class', []) or []) + ['broken-link']
                a_tag['title'] = 'Link target not found'
                continue

            if not resolved.name.endswith(extension):
                # /doc/ only renders Markdown
                continue

            new_href = document_url(rel_path)
            if parts.fragment:
                new_href += f'#{parts.fragment}'
            a_tag['href'] = new_href

        return str(soup)
    except Exception as e:
        logger.error(f"Error processing links: {e}", exc_info=True)
        return html_content  # Return original if processing fails
