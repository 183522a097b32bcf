#!/usr/bin/env python
"""
Command-line interface for the Markdown Document Viewer
"""

import argparse
import logging
import sys
from pathlib import Path

from docviewer.config import ViewerConfig
from docviewer.version_info import __version__, __build_timestamp__, __build_type__

logger = logging.getLogger(__name__)

EXAMPLE_FILE_NAME = 'example.md'
EXAMPLE_CONTENT = """
# Example

This is an example markdown file.
"""


def print_version():
    """Print version information."""
    print(f"DocViewer v{__version__}")
    print(f"Build: {__build_timestamp__}")
    print(f"Build Type: {__build_type__}")


def write_example(target_dir: Path, force: bool = False) -> Path:
    """
    Write an example document into ``target_dir``.
    Raises FileExistsError rather than overwriting unless ``force`` is set.
    """
    target_dir = Path(target_dir)
    target_dir.mkdir(parents=True, exist_ok=True)
    target = target_dir / EXAMPLE_FILE_NAME
    if target.exists() and not force:
        raise FileExistsError(f"{target} already exists (use --force to overwrite)")
    target.write_text(EXAMPLE_CONTENT, encoding='utf-8')
    return target


def start_server(config: ViewerConfig):
    """Start the Flask server, plus the docs watcher in development."""
    from docviewer.app import create_app
    from docviewer.core.indexer import ensure_docs_dir
    from docviewer.core.logging_config import setup_logging
    from docviewer.core.watcher import DocsWatcher

    setup_logging(config.log_dir, config.debug)
    ensure_docs_dir(config.docs_dir)

    app = create_app(config)

    logger.info(f"Document viewer v{__version__} running at http://{config.host}:{config.port}")
    logger.info(f"Add markdown files to: {config.docs_dir}")

    watcher = None
    if config.watch_enabled:
        watcher = DocsWatcher(config.docs_dir)
        watcher.start()

    try:
        # Reloader would spawn a second watcher in the child process
        app.run(host=config.host, port=config.port, debug=config.debug,
                use_reloader=False, threaded=True)
    finally:
        if watcher is not None:
            watcher.stop()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=f'DocViewer v{__version__}',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  docviewer --version              Show version information
  docviewer start                  Start server on localhost:3000
  docviewer start --port 8080      Start server on port 8080
  docviewer example                Write example.md into the docs folder
        """
    )

    parser.add_argument(
        '--version', '-v',
        action='store_true',
        help='Show version information'
    )
    parser.add_argument(
        '--host',
        type=str,
        default=None,
        help='Host to bind to (default: $HOST or localhost)'
    )
    parser.add_argument(
        '--port', '-p',
        type=int,
        default=None,
        help='Port to bind to (default: $PORT or 3000)'
    )
    parser.add_argument(
        '--debug', '-d',
        action='store_true',
        default=None,
        help='Run in debug mode'
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')
    subparsers.add_parser('start', help='Start the document server')

    example_parser = subparsers.add_parser('example', help='Write an example markdown file')
    example_parser.add_argument(
        '--dir',
        type=Path,
        default=None,
        help='Target directory (default: the docs folder)'
    )
    example_parser.add_argument(
        '--force', '-f',
        action='store_true',
        help='Overwrite an existing example file'
    )
    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.version:
        print_version()
        return 0

    config = ViewerConfig.from_env(host=args.host, port=args.port, debug=args.debug)

    if args.command == 'example':
        target_dir = args.dir or config.docs_dir
        try:
            target = write_example(target_dir, force=args.force)
        except OSError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        print(f"Success: {target} has been created.")
        return 0

    # Default behavior: start the server
    try:
        start_server(config)
        return 0
    except KeyboardInterrupt:
        print("\nServer stopped.")
        return 0
    except Exception as e:
        logger.error(f"Error starting server: {e}", exc_info=True)
        print(f"Error starting server: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
