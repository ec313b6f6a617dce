"""
Icon loading with a shared cache.
"""

import logging
import threading
from pathlib import Path
from typing import Dict, Optional

from PIL import Image

from .models import ICONS_DIR


class IconStorage:
    """Load game icons by id and keep them for reuse.

    Icons live under `<root>/ui/icon/<group>/<id>.png`, where the group is
    the id rounded down to a multiple of 1000, both zero padded to six
    digits. Safe to call from several threads at once.
    """

    def __init__(self, root: str | Path):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.root = Path(root)
        self._icons: Dict[int, Optional[Image.Image]] = {}
        self._lock = threading.Lock()

    def icon_path(self, icon_id: int) -> Path:
        group = icon_id // 1000 * 1000
        return self.root / ICONS_DIR / f"{group:06d}" / f"{icon_id:06d}.png"

    def load_icon(self, icon_id: int) -> Optional[Image.Image]:
        """Return the icon image, or None if the game has no such icon."""
        with self._lock:
            if icon_id in self._icons:
                return self._icons[icon_id]

        icon = self._read_icon(icon_id)

        with self._lock:
            # Another thread may have won the race; keep the first copy.
            return self._icons.setdefault(icon_id, icon)

    def _read_icon(self, icon_id: int) -> Optional[Image.Image]:
        path = self.icon_path(icon_id)
        if not path.is_file():
            self.logger.debug(f"Icon {icon_id} not found at {path}")
            return None
        try:
            with Image.open(path) as img:
                return img.convert("RGBA")
        except OSError as e:
            self.logger.warning(f"Could not load icon {icon_id} from {path}: {e}")
            return None

    def has_icon(self, icon_id: int) -> bool:
        return self.icon_path(icon_id).is_file()

    def __len__(self) -> int:
        with self._lock:
            return len(self._icons)

    def clear(self) -> None:
        with self._lock:
            self._icons.clear()
