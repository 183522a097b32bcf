"""
Document Viewer
A Flask application that lists the Markdown files in a docs folder and renders
them as HTML pages.
"""

import logging
from typing import Optional
from urllib.parse import unquote

from flask import Flask, abort, jsonify, render_template, request

from docviewer.config import ViewerConfig
from docviewer.core.errors import DocumentAccessDenied, DocumentNotFound
from docviewer.core.filtering import FilterState, filter_entries
from docviewer.core.indexer import group_by_top_level, list_documents, read_document
from docviewer.core.links import process_links_in_html
from docviewer.core.presentation import (
    DocumentEntry,
    build_document_context,
    build_index_context,
)
from docviewer.core.renderer import render_document
from docviewer.version_info import __version__ as VERSION

logger = logging.getLogger(__name__)

ERROR_MESSAGES = {
    403: 'Access denied',
    404: 'Document not found',
    500: 'Error reading document',
}


def create_app(config: Optional[ViewerConfig] = None) -> Flask:
    """Build the Flask app for one docs root."""
    config = config or ViewerConfig.from_env()

    app = Flask(__name__, static_folder='static', static_url_path='/static')
    app.config['SEND_FILE_MAX_AGE_DEFAULT'] = 0
    app.extensions['docviewer'] = config

    def scan():
        return list_documents(config.docs_dir, config.extension)

    @app.context_processor
    def inject_global_context():
        return {'version': VERSION}

    @app.route('/')
    def index():
        """Main page listing every document, with tabs and search."""
        paths = scan()
        logger.info(f"Index route: Found {len(paths)} documents")
        return render_template('index.html', **build_index_context(paths))

    @app.route('/doc/<path:filename>')
    def view_document(filename):
        """Render a single document."""
        # Links are built with every slash encoded; decode whatever the router left.
        # A file whose name literally contains %xx cannot be addressed because of this.
        filename = unquote(filename)
        try:
            md_text = read_document(config.docs_dir, filename)
        except DocumentAccessDenied:
            abort(403)
        except DocumentNotFound:
            abort(404)
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Error reading document {filename}: {e}", exc_info=True)
            abort(500)

        logger.info(f"Rendering document: {filename}, size: {len(md_text)} chars")
        html_content = render_document(md_text)
        html_content = process_links_in_html(html_content, config.docs_dir, filename, config.extension)
        return render_template('view.html', **build_document_context(filename, html_content))

    @app.route('/api/documents')
    def api_documents():
        paths = scan()
        return jsonify({
            'documents': paths,
            'groups': group_by_top_level(paths),
            'total': len(paths),
        })

    @app.route('/api/search')
    def api_search():
        """Filter the document list the same way the index page does."""
        state = FilterState(
            selected_group=request.args.get('group', '').strip(),
            search_text=request.args.get('q', ''),
        )
        entries = [DocumentEntry.from_path(p) for p in scan()]
        matches = filter_entries(entries, state)
        return jsonify([entry.path for entry in matches])

    def render_error(status: int):
        message = ERROR_MESSAGES.get(status, 'Error')
        return render_template('error.html', title=f'{status} {message}', status=status, message=message), status

    @app.errorhandler(403)
    def forbidden(error):
        logger.warning(f"403 for {request.path}")
        return render_error(403)

    @app.errorhandler(404)
    def not_found(error):
        logger.warning(f"404 for {request.path}")
        return render_error(404)

    @app.errorhandler(500)
    def internal_error(error):
        logger.error(f"500 Error for {request.path}: {error}")
        return render_error(500)

    logger.debug(f"App created for docs root {config.docs_dir}")
    return app
