"""
depscan: directive scanner, library closure resolver and deps manifest generator.
"""
from depscan.index import ProvideIndex, RequireIndex
from depscan.scanner import DirectiveSyntax, extract_name, scan, scan_files
from depscan.walker import list_files
from depscan.closure import ClosureResolver, scan_deps
from depscan.manifest import extract_requires, gen_add_dependency, gen_deps

__all__ = [
    "ProvideIndex",
    "RequireIndex",
    "DirectiveSyntax",
    "extract_name",
    "scan",
    "scan_files",
    "list_files",
    "ClosureResolver",
    "scan_deps",
    "extract_requires",
    "gen_add_dependency",
    "gen_deps",
]
