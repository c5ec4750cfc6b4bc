"""
Configuration for depscan.

Loads settings from a `depscan.yaml` file (a `deps:` section) with
environment variable overrides:

- DEPSCAN_CONFIG: config file used when no explicit path is given
- DEPSCAN_LIBRARY_PATH: root of the external library checkout
"""
import logging
import os
import yaml
from pathlib import Path
from typing import Any, Dict, List, Optional

from depscan.scanner import DirectiveSyntax

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = 'depscan.yaml'

DEFAULTS: Dict[str, Any] = {
    'library_path': 'closure-library',
    'library_subdir': 'closure/goog',
    'bootstrap': 'closure/goog/base.js',
    'namespace_prefix': 'goog',
    'app_root': 'lib',
    'extensions': ['.js'],
    'exclude': [],
    'declare_keyword': 'goog.provide',
    'require_keyword': 'goog.require',
    'statement': 'goog.addDependency',
    'serve_prefix': '../../',
}

_LIST_FIELDS = ('extensions', 'exclude')
_STRING_FIELDS = tuple(key for key, value in DEFAULTS.items() if isinstance(value, str))


class DepsConfig:
    """Settings for scanning, closure resolution and manifest output."""

    def __init__(self, config_dict: Optional[Dict[str, Any]] = None, base_dir: Optional[Path] = None):
        """
        Initialize from a parsed depscan.yaml dict or use defaults.

        Args:
            config_dict: Parsed YAML document (or None for defaults)
            base_dir: Directory relative paths resolve against (default: cwd)

        Raises:
            ValueError: If the document or one of its fields has the wrong shape
        """
        if config_dict is None:
            config_dict = {}
        if not isinstance(config_dict, dict):
            raise ValueError(f"Invalid config: expected mapping, got {type(config_dict).__name__}")

        deps = config_dict.get('deps')
        if deps is None:
            deps = {}
        if not isinstance(deps, dict):
            raise ValueError(f"Invalid config: 'deps' must be a mapping, got {type(deps).__name__}")

        values = dict(DEFAULTS)
        values.update(deps)
        for key in _LIST_FIELDS:
            if not isinstance(values[key], list):
                raise ValueError(f"Invalid config: '{key}' must be a list, got {type(values[key]).__name__}")
        for key in _STRING_FIELDS:
            if not isinstance(values[key], str):
                raise ValueError(f"Invalid config: '{key}' must be a string, got {type(values[key]).__name__}")

        self.base_dir = Path(base_dir) if base_dir else Path.cwd()

        library_path = os.getenv('DEPSCAN_LIBRARY_PATH') or values['library_path']
        self.library_path = self._resolve(library_path)
        self.library_subdir: str = values['library_subdir']
        self.bootstrap: str = values['bootstrap']
        self.namespace_prefix: str = values['namespace_prefix']
        self.app_root = self._resolve(values['app_root'])
        self.extensions: List[str] = list(values['extensions'])
        self.exclude: List[str] = list(values['exclude'])
        self.declare_keyword: str = values['declare_keyword']
        self.require_keyword: str = values['require_keyword']
        self.statement: str = values['statement']
        self.serve_prefix: str = values['serve_prefix']

    def _resolve(self, value: str) -> Path:
        path = Path(value).expanduser()
        if not path.is_absolute():
            path = self.base_dir / path
        return path

    @property
    def library_root(self) -> Path:
        """Directory scanned for external module definitions."""
        return self.library_path / self.library_subdir

    @property
    def bootstrap_file(self) -> str:
        """Absolute path of the file appended to every closure."""
        return os.path.abspath(self.library_path / self.bootstrap)

    @property
    def syntax(self) -> DirectiveSyntax:
        return DirectiveSyntax(
            declare_keyword=self.declare_keyword,
            require_keyword=self.require_keyword,
        )


def load_config(config_path: Optional[Path] = None) -> DepsConfig:
    """
    Load depscan configuration.

    An explicit path (argument or DEPSCAN_CONFIG) must exist. Without one,
    ./depscan.yaml is used when present, otherwise defaults.

    Raises:
        FileNotFoundError: If an explicit config path doesn't exist
        ValueError: If the config has an invalid shape
    """
    explicit = config_path or os.getenv('DEPSCAN_CONFIG')
    if explicit:
        path = Path(explicit)
        if not path.exists():
            raise FileNotFoundError(f"Config not found: {path}")
    else:
        path = Path.cwd() / DEFAULT_CONFIG_NAME
        if not path.exists():
            logger.debug("No depscan.yaml found, using defaults")
            return DepsConfig()

    with open(path, 'r') as f:
        config_dict = yaml.safe_load(f)

    logger.debug(f"Loaded config from {path}")
    return DepsConfig(config_dict, base_dir=path.resolve().parent)
