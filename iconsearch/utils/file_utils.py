"""
File operation utilities
"""

import logging
import os
import re
import shutil
from pathlib import Path
from typing import Optional, Tuple

logger = logging.getLogger(__name__)


def sanitize_filename(filename: str) -> str:
    """
    Sanitize filename to prevent writing outside the destination
    """
    # Remove path separators
    filename = filename.replace('/', '_').replace('\\', '_')

    # Remove special characters
    filename = re.sub(r'[^\w\s.-]', '', filename).strip()
    filename = filename.lstrip('.') or 'icon'

    # Limit length
    if len(filename) > 255:
        name, ext = os.path.splitext(filename)
        filename = name[:250] + ext

    return filename


def prepare_destination(directory) -> Tuple[Path, bool]:
    """Resolve an output directory, creating it if needed; returns (path, created)"""
    path = Path(directory).expanduser().resolve()
    if path.is_dir():
        return path, False
    path.mkdir(parents=True, exist_ok=True)
    logger.info("Created directory %s", path)
    return path, True


def copy_svg(source: Path, directory: Path, filename: Optional[str] = None) -> Path:
    """Copy an icon file into directory, keeping its name unless one is given"""
    source = Path(source)
    target = Path(directory) / sanitize_filename(filename or source.name)
    shutil.copyfile(source, target)
    logger.info("Copied %s to %s", source, target)
    return target
