"""
Provide and require indices built by a directive scan.

Both indices are plain in-memory maps keyed by absolute file path. They are
created empty, filled by one scan pass and then handed to the resolver or
the manifest generator. Nothing here is shared between scans.
"""
from typing import Dict, List, Optional


class ProvideIndex:
    """Bidirectional map between module names and the files declaring them."""

    def __init__(self):
        self._forward: Dict[str, str] = {}
        self._reverse: Dict[str, List[str]] = {}

    def set(self, namespace: str, path: str) -> None:
        """
        Register that `path` declares `namespace`.

        The forward entry is overwritten (last write wins); the reverse entry
        accumulates, including repeats for the same file.
        """
        self._forward[namespace] = path
        self._reverse.setdefault(path, []).append(namespace)

    def get(self, namespace: str) -> Optional[str]:
        """Return the file that most recently declared `namespace`, or None."""
        return self._forward.get(namespace)

    def get_all_provides(self) -> Dict[str, List[str]]:
        """Return file -> declared names, in registration order."""
        return self._reverse

    def __len__(self) -> int:
        return len(self._forward)

    def __contains__(self, namespace: str) -> bool:
        return namespace in self._forward


class RequireIndex:
    """Map from file to the set of module names it requires."""

    def __init__(self):
        # dict keys double as an insertion-ordered set
        self._map: Dict[str, Dict[str, bool]] = {}

    def set(self, path: str, namespace: str) -> None:
        self._map.setdefault(path, {})[namespace] = True

    def get(self, path: str) -> List[str]:
        """Return the names required by `path` (empty for unknown files)."""
        return list(self._map.get(path, {}))

    def get_all_dependencies(self) -> List[str]:
        """Return every distinct required name across all files."""
        results: Dict[str, bool] = {}
        for required in self._map.values():
            for namespace in required:
                results[namespace] = True
        return list(results)

    def get_all_requires(self) -> Dict[str, List[str]]:
        """Return file -> required names, for manifest rendering."""
        return {path: list(required) for path, required in self._map.items()}

    def __len__(self) -> int:
        return len(self._map)
