"""Registry of absolute path prefixes used to display stored files relative
to the mount root they live under."""

import os
from pathlib import Path
from typing import Iterable, Tuple, Union

SEPARATORS = ("/", "\\")


class AbsolutePathRegistry:
    """Ordered, immutable list of absolute path prefixes.

    Prefixes are matched in registration order; the first one that contains
    the path wins.

    Example:
        >>> registry = AbsolutePathRegistry(["/srv/uploads"])
        >>> registry.relativize("/srv/uploads/tmp/a.txt")
        'tmp/a.txt'
        >>> registry.relativize("/var/other/a.txt")
        '/var/other/a.txt'
    """

    def __init__(self, prefixes: Iterable[Union[str, Path]] = ()):
        normalized = []
        for prefix in prefixes:
            prefix = str(prefix)
            stripped = prefix.rstrip("/\\")
            # Keep the filesystem root itself usable as a prefix
            normalized.append(stripped if stripped else prefix[:1])
        self._prefixes: Tuple[str, ...] = tuple(p for p in normalized if p)

    @property
    def prefixes(self) -> Tuple[str, ...]:
        return self._prefixes

    def relativize(self, path: Union[str, Path]) -> str:
        """Strip the first matching prefix and one separator from path

        Args:
            path: Absolute path

        Returns:
            Path relative to the first matching prefix, or the path unchanged
            when no prefix matches
        """
        path = os.fspath(path)
        for prefix in self._prefixes:
            if prefix in SEPARATORS:
                if path.startswith(prefix):
                    return path[1:] or path
                continue

            if len(path) > len(prefix) and path.startswith(prefix) and path[len(prefix)] in SEPARATORS:
                # First match is final, even when nothing remains after it
                return path[len(prefix) + 1:] or path

        return path

    def __len__(self) -> int:
        return len(self._prefixes)

    def __repr__(self) -> str:
        return f"AbsolutePathRegistry({list(self._prefixes)!r})"
