# core/exceptions.py

"""
Errors raised by the catalog store, asset lookups and export.
Lookups that find nothing return None instead of raising.
"""

from pathlib import Path
from typing import Sequence


class IconSearchError(Exception):
    """Base error for the icon search tool"""
    pass


class StoreUnavailableError(IconSearchError):
    """The catalog database cannot be opened or was already closed"""
    pass


class AssetMissingError(IconSearchError):
    """A resolved asset path does not exist on disk"""

    def __init__(self, path: Path):
        self.path = Path(path)
        super().__init__(f"Icon file not found at {self.path}")


class UnknownFilterError(IconSearchError):
    """A group or collection filter name matched nothing"""

    def __init__(self, name: str, groups: Sequence[str], collections: Sequence[str]):
        self.name = name
        self.groups = list(groups)
        self.collections = list(collections)
        super().__init__(f'Unknown group/collection: "{name}"')

    def alternatives(self) -> str:
        lines = [f"Available groups: {', '.join(self.groups) or '(none)'}"]
        lines.append(f"Specialty collections: {', '.join(self.collections) or '(none)'}")
        return "\n".join(lines)


class RasterizationError(IconSearchError):
    """An SVG asset could not be rendered to pixels"""
    pass
