"""
Directory-backed resource locator.

Maps request kinds to sound files inside one resource directory. File names
are used exactly as given: no extension is added and nothing is renamed.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Dict, Hashable, Mapping, Optional, Union

logger = logging.getLogger(__name__)


class DirectoryResourceLocator:
    """
    Resolves request kinds to files in a resource directory.

    The file name for a kind is taken from, in order: the explicit
    file_names mapping, a ``file_name`` attribute on the kind, the value of
    an Enum kind, or ``str(kind)``.
    """

    def __init__(
        self,
        resource_dir: Union[str, Path],
        file_names: Optional[Mapping[Hashable, str]] = None,
    ):
        """
        Args:
            resource_dir: Directory holding the sound files
            file_names: Optional explicit kind -> file name mapping
        """
        self.resource_dir = Path(resource_dir)
        self._file_names: Dict[Hashable, str] = dict(file_names or {})
        if not self.resource_dir.is_dir():
            logger.warning(f"[RESOURCES] Resource directory does not exist: {self.resource_dir}")

    def file_name_for(self, kind: Hashable) -> str:
        if kind in self._file_names:
            return self._file_names[kind]
        file_name = getattr(kind, "file_name", None)
        if isinstance(file_name, str):
            return file_name
        if isinstance(kind, Enum):
            return str(kind.value)
        return str(kind)

    def resolve(self, kind: Hashable) -> Optional[Path]:
        """
        Locate the file for a kind.

        Args:
            kind: Request kind

        Returns:
            Path to an existing file inside the resource directory, or None
        """
        file_name = self.file_name_for(kind)
        path = self.resource_dir / file_name
        # Keep lookups inside the resource directory
        try:
            path.resolve().relative_to(self.resource_dir.resolve())
        except ValueError:
            logger.warning(f"[RESOURCES] Refusing path outside resource directory: {file_name}")
            return None
        if not path.is_file():
            logger.debug(f"[RESOURCES] Audio file {file_name} not found in {self.resource_dir}")
            return None
        return path
