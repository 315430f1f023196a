import os
from pathlib import Path
from typing import Optional

import yaml

DEFAULT_CONFIG_PATH = ".prsync.yml"

DEFAULT_CONFIG: dict = {
    "output_dir": "/tmp/github.com",
    "repo": None,  # default OWNER/REPO when a bare PR number is given
    "quiet": False,
}


def load_config(config_path: str = DEFAULT_CONFIG_PATH, cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .prsync.yml in the current directory
      3. CLI argument overrides
    """
    config = dict(DEFAULT_CONFIG)

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            try:
                file_config = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {config_path}: {e}") from e
        if not isinstance(file_config, dict):
            raise ValueError(f"Config file {config_path} must contain a mapping, got {type(file_config).__name__}")
        config.update(file_config)

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    config["github_token"] = os.environ.get("GITHUB_TOKEN")

    return config
