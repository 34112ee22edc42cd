from typing import Dict, Any, Union
from typeguard import typechecked
from pathlib import Path
import yaml

from kutulu.core.console import *
from kutulu.core.errors import ConfigError
from kutulu.config.config_utils import recursive_update


@typechecked
class ConfigLoader:
    def __init__(self, input_path: Union[str, Path]):
        """
        Initialize ConfigLoader to read and manage YAML configuration.

        Args:
            input_path: Path to the YAML file to load

        Raises:
            FileNotFoundError: If the file does not exist.
            ConfigError: If the file is not a YAML mapping.
        """
        self.input_path = Path(input_path)
        self.config_data: Dict[str, Any] = {}

        if self.input_path.exists():
            info(f"Loading config from {self.input_path}")
            self._load_config()
        else:
            error(f"Config file '{self.input_path}' does not exist.")
            raise FileNotFoundError(f"Config file '{self.input_path}' not found")

    def _load_config(self) -> None:
        """Load configuration from YAML file."""
        try:
            with open(self.input_path, "r") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            error(f"Failed to parse config file '{self.input_path}': {e}")
            raise ConfigError(f"Failed to parse config file '{self.input_path}': {e}") from e

        if not isinstance(data, dict):
            error(f"Config file '{self.input_path}' must contain a mapping, got {type(data).__name__}")
            raise ConfigError(f"Config file '{self.input_path}' must contain a mapping")
        self.config_data = data
        success(f"Config loaded successfully from {self.input_path}")

    def load_extra_definitions(self, extra_file_path: Union[str, Path], force: bool = True) -> None:
        """
        Load another YAML file and merge its content into the current config_data.

        Args:
            extra_file_path: Path to the extra YAML file to load
            force: If True, override existing entries; if False, only add missing/null entries
        """
        extra_file_path = Path(extra_file_path)
        debug(f"Loading extra config file from: {extra_file_path}")

        if not extra_file_path.exists():
            warning(f"Extra config file '{extra_file_path}' does not exist. Skipping load.")
            return

        with open(extra_file_path, "r") as f:
            extra_data = yaml.safe_load(f) or {}

        self.config_data = recursive_update(self.config_data, extra_data, force=force)
        info(f"Merged extra definitions from {extra_file_path}")

    def __str__(self) -> str:
        lines = [f"ConfigLoader({self.input_path.name})"]
        for category in sorted(self.config_data.keys()):
            value = self.config_data[category]
            if isinstance(value, dict):
                keys = list(value.keys())[:3]
                more = f"... +{len(value)-3} more" if len(value) > 3 else ""
                lines.append(f"  {category}: {{{', '.join(keys)}{more}}}")
            else:
                lines.append(f"  {category}: {value}")
        return "\n".join(lines)
