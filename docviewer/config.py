"""
Runtime configuration for the document viewer.

Built once at process start (see ``ViewerConfig.from_env``) and passed to the
app factory, the watcher and the CLI. Nothing reads these values globally.
"""

import logging
import os
import sys
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

DEFAULT_PORT = 3000
DEFAULT_HOST = 'localhost'
DOCUMENT_EXTENSION = '.md'
PRODUCTION = 'production'
DEVELOPMENT = 'development'


def get_project_root() -> Path:
    """
    Directory the docs/ and logs/ folders live in.
    Handles PyInstaller's frozen layout the same way the loader does.
    """
    if getattr(sys, 'frozen', False):
        return Path(sys.executable).parent
    return Path(__file__).resolve().parent.parent


def _parse_port(raw: Optional[str]) -> int:
    if not raw:
        return DEFAULT_PORT
    try:
        port = int(raw)
    except ValueError:
        logger.warning(f"Invalid PORT value {raw!r}, falling back to {DEFAULT_PORT}")
        return DEFAULT_PORT
    if not 0 < port < 65536:
        logger.warning(f"PORT {port} out of range, falling back to {DEFAULT_PORT}")
        return DEFAULT_PORT
    return port


@dataclass(frozen=True)
class ViewerConfig:
    docs_dir: Path = field(default_factory=lambda: get_project_root() / 'docs')
    log_dir: Path = field(default_factory=lambda: get_project_root() / 'logs')
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    environment: str = DEVELOPMENT
    debug: bool = False
    extension: str = DOCUMENT_EXTENSION

    @property
    def watch_enabled(self) -> bool:
        # Watcher is a local development convenience only
        return self.environment != PRODUCTION

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "ViewerConfig":
        """
        Build a config from environment variables (PORT, HOST, FLASK_ENV).
        Keyword overrides (e.g. from CLI flags) win over the environment.
        """
        env = os.environ if environ is None else environ
        values = {
            'host': env.get('HOST') or DEFAULT_HOST,
            'port': _parse_port(env.get('PORT')),
            'environment': (env.get('FLASK_ENV') or DEVELOPMENT).strip().lower(),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def with_overrides(self, **overrides) -> "ViewerConfig":
        values = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **values)
