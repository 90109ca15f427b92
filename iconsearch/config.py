from dataclasses import dataclass, field
from typing import Optional
import yaml
from pathlib import Path

NUCLEO_ROOT = "~/Library/Application Support/Nucleo/icons"


@dataclass
class CatalogConfig:
    """Location of the vendor catalog database and its asset tree"""
    database_path: str = f"{NUCLEO_ROOT}/data.sqlite3"
    icons_path: str = f"{NUCLEO_ROOT}/sets"
    asset_extension: str = "svg"

    def database_file(self) -> Path:
        return Path(self.database_path).expanduser()

    def icons_dir(self) -> Path:
        return Path(self.icons_path).expanduser()


@dataclass
class SearchConfig:
    """Configuration for ranked and clustered search"""
    default_limit: int = 20
    search_overfetch: int = 10  # rows fetched per requested result
    cluster_overfetch: int = 5  # ranked entries gathered per requested cluster
    cluster_widen_rounds: int = 2


@dataclass
class ExportConfig:
    """Configuration for icon export and terminal preview"""
    default_destination: str = "./icons"
    png_size: int = 64
    preview_width: int = 32


@dataclass
class SystemConfig:
    """System-wide configuration"""
    log_level: str = "WARNING"
    log_dir: Optional[str] = None

    catalog: CatalogConfig = field(default_factory=CatalogConfig)
    search: SearchConfig = field(default_factory=SearchConfig)
    export: ExportConfig = field(default_factory=ExportConfig)

    def save(self, path: str = "config.yaml"):
        """Save configuration to YAML file"""
        config_dict = {
            'log_level': self.log_level,
            'log_dir': self.log_dir,
            'catalog': {
                'database_path': self.catalog.database_path,
                'icons_path': self.catalog.icons_path,
                'asset_extension': self.catalog.asset_extension
            },
            'search': {
                'default_limit': self.search.default_limit,
                'search_overfetch': self.search.search_overfetch,
                'cluster_overfetch': self.search.cluster_overfetch,
                'cluster_widen_rounds': self.search.cluster_widen_rounds
            },
            'export': {
                'default_destination': self.export.default_destination,
                'png_size': self.export.png_size,
                'preview_width': self.export.preview_width
            }
        }

        with open(path, 'w') as f:
            yaml.dump(config_dict, f, default_flow_style=False, indent=2)

    @classmethod
    def load(cls, path: str = "config.yaml") -> 'SystemConfig':
        """Load configuration from YAML file"""
        if not Path(path).exists():
            return cls()  # Return default config

        with open(path, 'r') as f:
            config_dict = yaml.safe_load(f) or {}

        config = cls()

        config.log_level = config_dict.get('log_level', config.log_level)
        config.log_dir = config_dict.get('log_dir', config.log_dir)

        if 'catalog' in config_dict:
            cat = config_dict['catalog'] or {}
            config.catalog = CatalogConfig(
                database_path=cat.get('database_path', config.catalog.database_path),
                icons_path=cat.get('icons_path', config.catalog.icons_path),
                asset_extension=cat.get('asset_extension', config.catalog.asset_extension)
            )

        if 'search' in config_dict:
            sc = config_dict['search'] or {}
            config.search = SearchConfig(
                default_limit=sc.get('default_limit', config.search.default_limit),
                search_overfetch=sc.get('search_overfetch', config.search.search_overfetch),
                cluster_overfetch=sc.get('cluster_overfetch', config.search.cluster_overfetch),
                cluster_widen_rounds=sc.get('cluster_widen_rounds', config.search.cluster_widen_rounds)
            )

        if 'export' in config_dict:
            ex = config_dict['export'] or {}
            config.export = ExportConfig(
                default_destination=ex.get('default_destination', config.export.default_destination),
                png_size=ex.get('png_size', config.export.png_size),
                preview_width=ex.get('preview_width', config.export.preview_width)
            )

        return config
