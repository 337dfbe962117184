"""Configuration management for gitscript."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

DEFAULT_CONFIG: Dict[str, Any] = {
    "root_path": "",
    "junk_files": [".DS_Store", "._DS_Store"],
    "log_file": "gitscript.log",
    "git_command": "git",
    "banner_delay": 0,
    "clear_screen": True,
}


class Config:
    """Configuration class for gitscript."""

    def __init__(self, config_file: Optional[Path] = None) -> None:
        """Initialize configuration."""
        self.config: Dict[str, Any] = {}
        self.root_path: str = ""
        self.junk_files: List[str] = []
        self.log_file: str = ""
        self.git_command: str = "git"
        self.banner_delay: float = 0
        self.clear_screen: bool = True
        self.load_config(config_file)

    def load_config(self, config_file: Optional[Path] = None) -> None:
        """Load configuration from file.

        Defaults are applied first; values from ``config_file`` (YAML) are
        merged on top.

        Raises:
            OSError: If the file cannot be read.
            yaml.YAMLError: If the file is not valid YAML.
            ValueError: If a value has the wrong type.
        """
        self._merge_config(DEFAULT_CONFIG)

        if config_file is not None:
            with open(config_file, "r", encoding="utf-8") as f:
                user_config = yaml.safe_load(f)
            if user_config:
                self._merge_config(user_config)

    def _merge_config(self, config: Dict[str, Any]) -> None:
        """Merge configuration with current configuration."""
        if not isinstance(config, dict):
            raise ValueError("Configuration must be a dictionary")

        self.config.update(config)

        if "root_path" in config:
            root_path = config["root_path"]
            if root_path is None:
                root_path = ""
            if not isinstance(root_path, str):
                raise ValueError("root_path must be a string")
            self.root_path = str(Path(root_path).expanduser()) if root_path else ""

        if "junk_files" in config:
            if not isinstance(config["junk_files"], list):
                raise ValueError("junk_files must be a list")
            self.junk_files = list(config["junk_files"])

        if "log_file" in config:
            if not isinstance(config["log_file"], str):
                raise ValueError("log_file must be a string")
            self.log_file = config["log_file"]

        if "git_command" in config:
            if not isinstance(config["git_command"], str):
                raise ValueError("git_command must be a string")
            self.git_command = config["git_command"]

        if "banner_delay" in config:
            delay = config["banner_delay"]
            if isinstance(delay, bool) or not isinstance(delay, (int, float)):
                raise ValueError("banner_delay must be a number")
            self.banner_delay = delay

        if "clear_screen" in config:
            if not isinstance(config["clear_screen"], bool):
                raise ValueError("clear_screen must be a boolean")
            self.clear_screen = config["clear_screen"]

    def update(self, **overrides: Any) -> None:
        """Apply command line overrides, ignoring options that were not given."""
        self._merge_config({k: v for k, v in overrides.items() if v is not None})

    def validate(self) -> List[str]:
        """Validate configuration."""
        errors = []

        if not self.root_path:
            errors.append("root_path must be set (use --path)")

        for name in self.junk_files:
            if not isinstance(name, str):
                errors.append(f"junk file {name!r} must be a string")

        if not self.log_file:
            errors.append("log_file must not be empty")

        if not self.git_command:
            errors.append("git_command must not be empty")

        if self.banner_delay < 0:
            errors.append("banner_delay must not be negative")

        return errors

