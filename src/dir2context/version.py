"""Version lookup for the CLI ``--version`` flag."""

from __future__ import annotations

from functools import lru_cache
from importlib import metadata, resources


_DISTRIBUTION = "dir2context"
_VERSION_FILENAME = "VERSION"


@lru_cache(maxsize=1)
def get_version() -> str:
    """
    Return the dir2context version string.

    The packaged ``VERSION`` file wins so source checkouts report the same
    value as installed wheels; distribution metadata is the second choice.
    """
    try:
        bundled = resources.files(_DISTRIBUTION).joinpath(_VERSION_FILENAME)
        text = bundled.read_text(encoding="utf-8").strip()
        if text:
            return text
    except (FileNotFoundError, ModuleNotFoundError):
        pass
    try:
        return metadata.version(_DISTRIBUTION)
    except metadata.PackageNotFoundError:
        return "unknown"


__all__ = ["get_version", "__version__"]

__version__ = get_version()
