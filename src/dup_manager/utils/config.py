"""Configuration management for dup-manager."""

import copy
import os
from typing import Any, Dict, List, Optional


class Config:
    """Holds the fixed settings used across the scan and quarantine pipeline."""

    DEFAULT_SETTINGS = {
        "quarantine": {
            "folder_name": "DeletionDuplicates",
            "manifest_name": "paths.txt",
        },
        "scan": {
            "trash_folders": [
                "$RECYCLE.BIN",
                "RECYCLE.BIN",
                "RECYCLER",
                ".Trash",
                ".Trashes",
            ],
            "shortcut_extensions": [".lnk"],
            "posix_system_dirs": ["/proc", "/sys", "/dev"],
        },
        "hashing": {
            "chunk_size": 64 * 1024,  # bytes read per digest update
        },
    }

    def __init__(self, overrides: Optional[Dict[str, Any]] = None):
        """
        Initialize configuration.

        Args:
            overrides: Optional mapping of dot-notation keys to values,
                e.g. {"hashing.chunk_size": 4096}
        """
        self.settings: Dict[str, Any] = copy.deepcopy(self.DEFAULT_SETTINGS)
        for key, value in (overrides or {}).items():
            self.set(key, value)

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        Args:
            key: Configuration key (supports dot notation, e.g., 'quarantine.folder_name')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        keys = key.split(".")
        value = self.settings
        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
                if value is None:
                    return default
            else:
                return default
        return value

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value for this session.

        Args:
            key: Configuration key (supports dot notation)
            value: Value to set
        """
        keys = key.split(".")
        target = self.settings
        for k in keys[:-1]:
            if k not in target or not isinstance(target[k], dict):
                target[k] = {}
            target = target[k]
        target[keys[-1]] = value

    def get_quarantine_folder_name(self) -> str:
        """Get the name of the per-volume quarantine folder."""
        return self.get("quarantine.folder_name")

    def get_manifest_name(self) -> str:
        """Get the file name of the audit log inside a quarantine folder."""
        return self.get("quarantine.manifest_name")

    def get_chunk_size(self) -> int:
        return int(self.get("hashing.chunk_size"))

    def get_excluded_names(self) -> List[str]:
        """Folder names that are never descended into."""
        return [self.get_quarantine_folder_name()] + list(
            self.get("scan.trash_folders", [])
        )

    def get_system_directories(self) -> List[str]:
        """
        Get the operating system's own directories, which are never scanned.

        Returns:
            Normalized absolute paths (compare with os.path.normcase)
        """
        if os.name == "nt":
            system_root = os.environ.get("SystemRoot") or os.environ.get("WINDIR")
            dirs = [system_root] if system_root else []
        else:
            dirs = list(self.get("scan.posix_system_dirs", []))
        return [os.path.normcase(os.path.abspath(d)) for d in dirs]
