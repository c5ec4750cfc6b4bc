"""
Closure resolution against an external library tree.

Given the requirements of an application tree, find the minimal set of
library files that must be loaded before it. Only requirements under the
library's namespace prefix are looked up; everything else is assumed to be
provided by the application itself.

Resolution is a monotone fixed point over the library's provide index:
the name -> file map only ever grows, and the universe of names is finite,
so require cycles simply stop contributing new entries.
"""
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from depscan.config import DepsConfig
from depscan.index import ProvideIndex, RequireIndex
from depscan.scanner import DEFAULT_SYNTAX, DirectiveSyntax, scan
from depscan.walker import DEFAULT_EXTENSIONS, list_files

logger = logging.getLogger(__name__)


@dataclass
class ExternalLibrary:
    """Indices of a scanned library tree."""
    provides: ProvideIndex
    requires: RequireIndex


class ClosureResolver:
    """Resolves application requirements to external library files."""

    def __init__(
        self,
        library_root: Union[str, Path],
        bootstrap_file: Union[str, Path],
        namespace_prefix: str = 'goog',
        syntax: DirectiveSyntax = DEFAULT_SYNTAX,
        extensions: Iterable[str] = DEFAULT_EXTENSIONS,
        exclude: Iterable[str] = (),
    ):
        """
        Initialize resolver.

        Args:
            library_root: Directory holding the library's module files
            bootstrap_file: File appended to every closure (e.g. base.js)
            namespace_prefix: Only required names starting with this are resolved
            syntax: Directive keywords used by the library
            extensions: File suffixes scanned under `library_root`
            exclude: Directory names skipped under `library_root`
        """
        self.library_root = Path(library_root)
        self.bootstrap_file = os.path.abspath(bootstrap_file)
        self.namespace_prefix = namespace_prefix
        self.syntax = syntax
        self.extensions = tuple(extensions)
        self.exclude = tuple(exclude)
        self._library: Optional[ExternalLibrary] = None

    @classmethod
    def from_config(cls, config: DepsConfig) -> 'ClosureResolver':
        return cls(
            library_root=config.library_root,
            bootstrap_file=config.bootstrap_file,
            namespace_prefix=config.namespace_prefix,
            syntax=config.syntax,
            extensions=config.extensions,
            exclude=config.exclude,
        )

    @property
    def library(self) -> ExternalLibrary:
        """Library indices, scanned on first access."""
        if self._library is None:
            files = list_files(self.library_root, self.extensions, self.exclude)
            provides, requires = scan(files, self.syntax)
            logger.info(f"Scanned library {self.library_root}: {len(files)} files, {len(provides)} provided names")
            self._library = ExternalLibrary(provides=provides, requires=requires)
        return self._library

    def seed_namespaces(self, app_requires: RequireIndex) -> List[str]:
        """Return the application's distinct requirements under the namespace prefix."""
        return [
            ns for ns in app_requires.get_all_dependencies()
            if ns.startswith(self.namespace_prefix)
        ]

    def resolve_namespaces(self, app_requires: RequireIndex) -> Dict[str, str]:
        """
        Compute the fixed-point map of required names to defining files.

        Names without a definer in the library are dropped.

        Raises:
            RuntimeError: If the map keeps growing past the library's name count
        """
        library = self.library
        resolved: Dict[str, str] = {}

        for ns in self.seed_namespaces(app_requires):
            path = library.provides.get(ns)
            if path is None:
                logger.debug(f"Unresolved requirement dropped: {ns}")
                continue
            resolved[ns] = path

        max_rounds = len(library.provides) + 1
        rounds = 0
        while True:
            old_count = len(resolved)
            for ns in list(resolved):
                for required in library.requires.get(resolved[ns]):
                    if required in resolved:
                        continue
                    path = library.provides.get(required)
                    if path is None:
                        logger.debug(f"Unresolved requirement dropped: {required} (required by {ns})")
                        continue
                    resolved[required] = path

            rounds += 1
            if len(resolved) == old_count:
                break
            if rounds > max_rounds:
                raise RuntimeError(
                    f"Closure did not converge after {rounds} rounds "
                    f"({len(resolved)} names, library has {len(library.provides)})"
                )

        logger.debug(f"Closure converged after {rounds} rounds with {len(resolved)} names")
        return resolved

    def resolve_files(self, app_requires: RequireIndex) -> List[str]:
        """Return the distinct library files needed, without the bootstrap file."""
        files: Dict[str, bool] = {}
        for path in self.resolve_namespaces(app_requires).values():
            files[path] = True
        return list(files)

    def resolve(self, app_requires: RequireIndex) -> List[str]:
        """Return the library files needed, with the bootstrap file last."""
        files = [f for f in self.resolve_files(app_requires) if f != self.bootstrap_file]
        files.append(self.bootstrap_file)
        logger.info(f"Resolved {len(files)} library files")
        return files


def scan_deps(config: DepsConfig, app_root: Optional[Union[str, Path]] = None) -> List[str]:
    """
    Find the library files an application tree depends on.

    Args:
        config: depscan configuration
        app_root: Application directory (default: config.app_root)

    Returns:
        Library file paths, bootstrap file last
    """
    root = app_root if app_root is not None else config.app_root
    files = list_files(root, config.extensions, config.exclude)
    _, requires = scan(files, config.syntax)
    return ClosureResolver.from_config(config).resolve(requires)
