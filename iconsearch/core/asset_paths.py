# core/asset_paths.py

from pathlib import Path
from iconsearch.core.models import IconEntry


class AssetResolver:
    """
    Maps catalog entries to their files under the vendor asset root.

    Layout is <asset_root>/<set_id>/<entry_id>.<ext>. Nothing here touches
    the filesystem; callers check existence before reading.
    """

    def __init__(self, asset_root, extension: str = "svg"):
        self.asset_root = Path(asset_root).expanduser()
        self.extension = extension.lstrip('.')

    def resolve(self, set_id: int, entry_id: int) -> Path:
        return self.asset_root / str(set_id) / f"{entry_id}.{self.extension}"

    def resolve_entry(self, entry: IconEntry) -> Path:
        return self.resolve(entry.set_id, entry.id)
