"""API key resolution wiring for the CLI.

Resolution order (stops at first success):
  1. The key saved with `snipreview key set` (stored as `<provider>-api-key`)
  2. The provider's environment variable(s), e.g. GEMINI_API_KEY then API_KEY

The policy itself lives in snipreview_core.credentials; this module only
binds it to the configured store and provider.
"""

from __future__ import annotations

from snipreview_core.config import credential_key, env_credential_names
from snipreview_core.credentials import CredentialResolver


def build_resolver(config: dict, store) -> CredentialResolver:
    return CredentialResolver(
        store=store,
        key=credential_key(config["model"]),
        env_names=env_credential_names(config),
    )


def mask(value: str) -> str:
    """Show only the last four characters of a key."""
    if len(value) <= 4:
        return "*" * len(value)
    return "*" * (len(value) - 4) + value[-4:]
