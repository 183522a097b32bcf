import logging
from typing import Dict, List

import markdown
from pygments.formatters import HtmlFormatter
from pygments.styles import get_all_styles

logger = logging.getLogger(__name__)

HIGHLIGHT_CSS_CLASS = 'highlight'
DEFAULT_HIGHLIGHT_STYLE = 'default'

EXTENSIONS: List[str] = [
    'nl2br',                 # Soft line breaks render as <br>
    'tables',
    'sane_lists',
    'pymdownx.tilde',        # ~~strikethrough~~
    'pymdownx.magiclink',    # Bare URL autolinks
    'pymdownx.tasklist',
    'pymdownx.highlight',
    'pymdownx.superfences',  # Fenced code blocks
]


def _extension_configs(highlight: bool = True) -> Dict[str, Dict]:
    return {
        'pymdownx.highlight': {
            'use_pygments': highlight,
            # Unknown or missing language tag -> auto-detect -> plain text
            'guess_lang': 'block',
            'css_class': HIGHLIGHT_CSS_CLASS,
        },
    }


def _convert(md_text: str, highlight: bool) -> str:
    md_instance = markdown.Markdown(
        extensions=EXTENSIONS,
        extension_configs=_extension_configs(highlight),
    )
    return md_instance.convert(md_text)


def render_document(md_text: str) -> str:
    """
    Convert a document's Markdown to an HTML fragment.

    Fenced code is highlighted with Pygments using the declared language,
    falling back to lexer guessing and then to escaped plain text. If the
    highlighter itself blows up the document is rendered again without it.
    """
    logger.debug(f"Render document: {len(md_text)} chars input")
    try:
        return _convert(md_text, highlight=True)
    except Exception as e:
        logger.warning(f"Highlighting failed, rendering without it: {e}")
        return _convert(md_text, highlight=False)


def highlight_stylesheet(style: str = DEFAULT_HIGHLIGHT_STYLE) -> str:
    """Pygments CSS rules for rendered code blocks."""
    if style not in set(get_all_styles()):
        logger.warning(f"Unknown Pygments style {style!r}, using {DEFAULT_HIGHLIGHT_STYLE!r}")
        style = DEFAULT_HIGHLIGHT_STYLE
    return HtmlFormatter(style=style).get_style_defs(f'.{HIGHLIGHT_CSS_CLASS}')
