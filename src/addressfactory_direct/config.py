from __future__ import annotations

import os
from dataclasses import dataclass, field


def _env_flag(name: str, default: str = "0") -> bool:
    value = os.getenv(name, default)
    return value.lower() not in {"0", "false", "no", ""}


@dataclass
class AddressfactoryConfig:
    """Connection settings for the address verification web service."""

    url: str = field(
        default_factory=lambda: os.getenv(
            "ADDRESSFACTORY_URL", "http://127.0.0.1:8080/addressfactory/direct"
        )
    )
    sandbox_url: str = field(
        default_factory=lambda: os.getenv(
            "ADDRESSFACTORY_SANDBOX_URL", "http://127.0.0.1:8080/addressfactory/direct-sandbox"
        )
    )
    sandbox: bool = field(default_factory=lambda: _env_flag("ADDRESSFACTORY_SANDBOX"))
    timeout: float = field(
        default_factory=lambda: float(os.getenv("ADDRESSFACTORY_TIMEOUT", "30"))
    )

    def endpoint(self, sandbox: bool | None = None) -> str:
        """URL to send requests to, honouring an explicit sandbox override."""
        use_sandbox = self.sandbox if sandbox is None else sandbox
        return self.sandbox_url if use_sandbox else self.url
