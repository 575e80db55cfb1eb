"""YAML config loading with env var expansion."""

import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import PDFServicesConfig


CONFIG_ENV_VAR = "PDFSERVICES_CONFIG"


def load_config(cli_path: str | None = None) -> PDFServicesConfig:
    """Load config from the first file found, falling back to defaults.

    Resolution order: CLI path > $PDFSERVICES_CONFIG > ./pdfservices.yaml >
    ~/.pdfservices/config.yaml > built-in defaults.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    config_paths = [
        Path(cli_path) if cli_path else None,
        Path(env_path) if env_path else None,
        Path("./pdfservices.yaml"),
        Path.home() / ".pdfservices" / "config.yaml",
    ]

    for path in config_paths:
        if path and path.exists():
            try:
                with open(path) as f:
                    raw = yaml.safe_load(f)
                if raw is None:
                    continue
                raw = _expand_env_vars(raw)
                return PDFServicesConfig(**raw)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {path}: {e}") from e
            except ValidationError as e:
                raise ValueError(f"Invalid config in {path}: {e}") from e

    return PDFServicesConfig()


_ENV_REF = re.compile(r"\$\{(\w+)\}")


def _expand_env_vars(obj: object) -> object:
    """Expand ${VAR} references in every string of a parsed YAML tree.

    Unset variables expand to an empty string.
    """
    if isinstance(obj, dict):
        return {key: _expand_env_vars(value) for key, value in obj.items()}
    if isinstance(obj, list):
        return [_expand_env_vars(item) for item in obj]
    if isinstance(obj, str):
        return _ENV_REF.sub(lambda m: os.environ.get(m.group(1), ""), obj)
    return obj


# Default YAML template for `pdfservices config init`
DEFAULT_CONFIG_TEMPLATE = """\
# pdfservices.yaml

# Remote service
service:
  host: "https://na1.fusion.foxit.com"
  client_id_env: "CLIENT_ID"          # env var holding the client_id header
  client_secret_env: "CLIENT_SECRET"  # env var holding the client_secret header
  timeout: 60

# Job polling
polling:
  interval: 5                  # seconds between status queries
  # max_wait: 600              # give up after this many seconds (unbounded if unset)

# Pipeline
pipeline:
  concurrent_uploads: false    # upload multi-input jobs in parallel

# Logging
log_level: "info"              # debug | info | warn | error
log_format: "text"             # text | json
"""
