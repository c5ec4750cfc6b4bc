"""
Dependency manifest generation.

Renders provide/require indices as loader statements, one per file:

    goog.addDependency("../../lib/a.js", ["lf.A"], ["lf.B","goog.array"]);

Paths are relative to a base directory and prefixed with the serving root
traversal. Arrays are compact JSON. Output must stay byte-exact for the
runtime loader.
"""
import json
import logging
import os
from pathlib import Path
from typing import Dict, Iterable, List, Tuple, Union

from depscan.closure import ClosureResolver, ExternalLibrary
from depscan.config import DepsConfig
from depscan.index import ProvideIndex, RequireIndex
from depscan.scanner import DEFAULT_SYNTAX, DirectiveSyntax, scan
from depscan.walker import list_files

logger = logging.getLogger(__name__)

DEFAULT_STATEMENT = 'goog.addDependency'
DEFAULT_SERVE_PREFIX = '../../'


def _json_array(values: List[str]) -> str:
    return json.dumps(values, separators=(',', ':'), ensure_ascii=False)


def _restrict(library: ExternalLibrary, files: List[str]) -> Tuple[ProvideIndex, RequireIndex]:
    """Copy the library's entries for `files`, in `files` order."""
    all_provides = library.provides.get_all_provides()
    provides = ProvideIndex()
    requires = RequireIndex()
    for path in files:
        for ns in all_provides.get(path, []):
            provides.set(ns, path)
        for ns in library.requires.get(path):
            requires.set(path, ns)
    return provides, requires


def gen_add_dependency(
    base_path: Union[str, Path],
    provides: ProvideIndex,
    requires: RequireIndex,
    statement: str = DEFAULT_STATEMENT,
    serve_prefix: str = DEFAULT_SERVE_PREFIX,
) -> List[str]:
    """
    Render one dependency statement per file found in either index.

    Files that declare something come first, in scan order, followed by
    files that only require.

    Args:
        base_path: Directory paths are made relative to
        provides: Provide index of the scanned tree
        requires: Require index of the scanned tree
        statement: Loader function name
        serve_prefix: Prefix prepended to every relative path

    Returns:
        Statement lines, unjoined
    """
    all_provides = provides.get_all_provides()
    all_requires = requires.get_all_requires()

    files: Dict[str, bool] = {}
    for path in all_provides:
        files[path] = True
    for path in all_requires:
        files[path] = True

    results = []
    for path in files:
        serve_path = os.path.relpath(path, base_path)
        declared = _json_array(all_provides.get(path, []))
        required = _json_array(all_requires.get(path, []))
        results.append(f'{statement}("{serve_prefix}{serve_path}", {declared}, {required});')
    return results


def gen_deps(
    base_path: Union[str, Path],
    targets: Iterable[Union[str, Path]],
    config: DepsConfig,
    include_library: bool = False,
) -> str:
    """
    Generate the deps manifest for a set of application directories.

    Args:
        base_path: Directory manifest paths are relative to
        targets: Application directories to walk
        config: depscan configuration
        include_library: Also emit records for the library files the
            application's closure pulls in

    Returns:
        Newline-joined manifest text
    """
    files: List[str] = []
    for target in targets:
        files.extend(list_files(target, config.extensions, config.exclude))

    provides, requires = scan(files, config.syntax)
    logger.info(f"Scanned {len(files)} application files")

    results = gen_add_dependency(base_path, provides, requires, config.statement, config.serve_prefix)

    if include_library:
        resolver = ClosureResolver.from_config(config)
        library_files = resolver.resolve_files(requires)
        library_provides, library_requires = _restrict(resolver.library, library_files)
        results.extend(gen_add_dependency(
            base_path, library_provides, library_requires, config.statement, config.serve_prefix
        ))

    return '\n'.join(results)


def extract_requires(file_path: Union[str, Path], syntax: DirectiveSyntax = DEFAULT_SYNTAX) -> str:
    """
    Return one file's requirements as a quoted list: `'a.b', 'c.d'`.

    Used to splice a single file's requirements into a generated artifact.
    """
    _, requires = scan([file_path], syntax)
    return ', '.join(f"'{ns}'" for ns in requires.get(os.path.abspath(file_path)))
