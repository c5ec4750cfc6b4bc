"""
Line-oriented directive scanner.

A directive is a line that starts, at column zero, with the declare or the
require keyword, followed by one delimiter character, a quote, the module
name, the closing quote and a semicolon:

    goog.provide('lf.Type');
    goog.require('lf.schema');
    declare 'a.b.c';

Matching is a literal prefix test on the untrimmed line, not a tokenizer.
Anything after the first semicolon is ignored.
"""
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Tuple, Union

from depscan.index import ProvideIndex, RequireIndex

logger = logging.getLogger(__name__)

# Characters closing the name between it and the semicolon
_NAME_CLOSERS = '\'")'


@dataclass(frozen=True)
class DirectiveSyntax:
    """Keywords recognised by the scanner."""
    declare_keyword: str = 'goog.provide'
    require_keyword: str = 'goog.require'


DEFAULT_SYNTAX = DirectiveSyntax()


def extract_name(line: str, keyword: str) -> Optional[str]:
    """
    Extract the module name from a directive line.

    Args:
        line: Raw source line, not stripped
        keyword: Directive keyword expected at column zero

    Returns:
        The module name, or None if the line is not a directive for `keyword`
    """
    if not line.startswith(keyword):
        return None
    end = line.find(';')
    if end < 0:
        return None
    name = line[len(keyword) + 2:end].rstrip().rstrip(_NAME_CLOSERS)
    return name or None


def scan_files(
    paths: Iterable[Union[str, Path]],
    provides: ProvideIndex,
    requires: RequireIndex,
    syntax: DirectiveSyntax = DEFAULT_SYNTAX,
) -> None:
    """
    Scan every file in `paths` and register its directives.

    Files are keyed by absolute path. Read errors propagate; a scan never
    returns partial results.
    """
    count = 0
    for path in paths:
        real_path = os.path.abspath(path)
        with open(real_path, 'r', encoding='utf-8', newline='') as f:
            contents = f.read()

        for line in contents.split('\n'):
            namespace = extract_name(line, syntax.require_keyword)
            if namespace:
                requires.set(real_path, namespace)
            namespace = extract_name(line, syntax.declare_keyword)
            if namespace:
                provides.set(namespace, real_path)
        count += 1

    logger.debug(f"Scanned {count} files ({len(provides)} provided names, {len(requires)} requiring files)")


def scan(
    paths: Iterable[Union[str, Path]],
    syntax: DirectiveSyntax = DEFAULT_SYNTAX,
) -> Tuple[ProvideIndex, RequireIndex]:
    """Scan `paths` into a fresh pair of indices."""
    provides = ProvideIndex()
    requires = RequireIndex()
    scan_files(paths, provides, requires, syntax)
    return provides, requires
