"""
Best-effort filesystem watcher for the docs folder.

Logs create/modify/delete/move events for local development. It holds no
index state and must never raise to callers.
"""

import logging
import threading
from pathlib import Path
from typing import Optional

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

logger = logging.getLogger(__name__)

JOIN_TIMEOUT = 2.0


class DocsEventHandler(FileSystemEventHandler):
    def on_any_event(self, event: FileSystemEvent) -> None:
        try:
            if event.event_type in ('opened', 'closed', 'closed_no_write'):
                return
            logger.info(f"File {event.event_type}: {event.src_path}")
        except Exception:
            return


class DocsWatcher:
    """Watches ``root`` recursively on a daemon observer thread."""

    def __init__(self, root: Path):
        self.root = Path(root)
        self._observer: Optional[Observer] = None
        self._lock = threading.Lock()

    @property
    def running(self) -> bool:
        return self._observer is not None

    def start(self) -> bool:
        with self._lock:
            if self._observer is not None:
                return True
            try:
                observer = Observer()
                observer.daemon = True
                observer.schedule(DocsEventHandler(), str(self.root), recursive=True)
                observer.start()
            except Exception as e:
                logger.warning(f"Failed to watch {self.root}: {e}")
                return False
            self._observer = observer
            logger.info(f"Watching {self.root} for changes")
            return True

    def stop(self) -> None:
        """Safe to call multiple times."""
        with self._lock:
            observer = self._observer
            self._observer = None
        if observer is None:
            return
        try:
            observer.stop()
            observer.join(timeout=JOIN_TIMEOUT)
        except Exception as e:
            logger.debug(f"Error stopping watcher: {e}")
