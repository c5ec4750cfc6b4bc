"""
Recursive file listing for directive scans.

Every directory below the start path is descended and files are kept by
extension. Entries are visited in sorted order so that manifests generated
from the same tree are byte-identical across runs.
"""
import logging
import os
from pathlib import Path
from typing import Iterable, List, Union

logger = logging.getLogger(__name__)

# Source files carrying goog.provide / goog.require directives
DEFAULT_EXTENSIONS = ('.js',)


def _get_files(directory: str, extensions: Iterable[str], exclude: Iterable[str], files: List[str]) -> None:
    for name in sorted(os.listdir(directory)):
        path = os.path.join(directory, name)
        if os.path.isdir(path):
            if name in exclude:
                logger.debug(f"Skipping excluded directory: {path}")
                continue
            _get_files(path, extensions, exclude, files)
        elif os.path.splitext(name)[1] in extensions:
            files.append(path)


def list_files(
    root: Union[str, Path],
    extensions: Iterable[str] = DEFAULT_EXTENSIONS,
    exclude: Iterable[str] = (),
) -> List[str]:
    """
    List files under `root` whose extension is in `extensions`.

    Args:
        root: Directory to walk
        extensions: File suffixes to keep, including the dot
        exclude: Directory names that are never descended

    Returns:
        File paths joined onto `root`, in sorted descent order

    Raises:
        FileNotFoundError: If `root` does not exist
        NotADirectoryError: If `root` is a file
    """
    extensions = tuple(extensions)
    exclude = set(exclude)
    files: List[str] = []
    _get_files(str(root), extensions, exclude, files)
    logger.debug(f"Found {len(files)} files under {root}")
    return files
