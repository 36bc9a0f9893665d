from pathlib import Path
from typing import Optional

import yaml

from snipreview_core.languages import DEFAULT_LANGUAGE

PROVIDERS = ("gemini", "anthropic", "openai")
STORES = ("memory", "file", "sqlite")

DEFAULT_CONFIG: dict = {
    "model": "gemini",
    "language": DEFAULT_LANGUAGE,
    "store": "file",
    "store_path": None,  # None = .snipreview.json for "file", .snipreview.db for "sqlite"
    "format_reviews": True,
    "formatter_timeout": 20,
    "env_credential": None,  # None = provider defaults; a name or list of names to override
}

_DEFAULT_STORE_PATHS = {
    "file": ".snipreview.json",
    "sqlite": ".snipreview.db",
}

# Environment variables consulted, in order, when no credential is persisted.
# API_KEY is what the original browser build read from its environment.
ENV_CREDENTIALS: dict[str, list[str]] = {
    "gemini": ["GEMINI_API_KEY", "API_KEY"],
    "anthropic": ["ANTHROPIC_API_KEY"],
    "openai": ["OPENAI_API_KEY"],
}


def load_config(config_path: str = ".snipreview.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .snipreview.yml in the current directory
      3. CLI argument overrides
    """
    config = dict(DEFAULT_CONFIG)

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        config.update(file_config)

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    if config["model"] not in PROVIDERS:
        raise ValueError(f"Unknown model provider: {config['model']!r}. Choose one of: {', '.join(PROVIDERS)}.")
    if config["store"] not in STORES:
        raise ValueError(f"Unknown store: {config['store']!r}. Choose one of: {', '.join(STORES)}.")

    if config["store_path"] is None:
        config["store_path"] = _DEFAULT_STORE_PATHS.get(config["store"])

    return config


def credential_key(model: str) -> str:
    """Storage key under which the persisted credential for ``model`` lives."""
    return f"{model}-api-key"


def env_credential_names(config: dict) -> list[str]:
    """Environment variable names to fall back to, in lookup order."""
    override = config.get("env_credential")
    if override:
        return [override] if isinstance(override, str) else list(override)
    return list(ENV_CREDENTIALS[config["model"]])
