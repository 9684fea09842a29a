"""Stored user configuration for restricted-access sessions."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

_KNOWN_KEYS = ("user", "password", "token", "ip", "hostname", "networks")


@dataclass
class UserConfig:
    """Identity and persisted settings of one restricted-access user.

    Attributes:
        user: Username (also the store file name).
        password: bcrypt hash of the user's password.
        token: Reusable sign-in token handed to clients after sign-in.
        ip: Fixed origin address, when configured.
        hostname: Fixed origin hostname, when configured.
        networks: Stored network entries restored at startup.
        extra: Unknown keys, preserved verbatim on rewrite.
        source: File the configuration was loaded from; rewrites replace
            this exact file even when ``user`` differs from its name.
    """

    user: str
    password: str | None = None
    token: str | None = None
    ip: str | None = None
    hostname: str | None = None
    networks: list[dict[str, Any]] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)
    source: Path | None = field(default=None, compare=False, repr=False)

    @classmethod
    def from_dict(cls, name: str, data: dict[str, Any], *, source: Path | None = None) -> "UserConfig":
        networks = data.get("networks")
        return cls(
            user=str(data.get("user") or name),
            password=data.get("password") or None,
            token=data.get("token") or None,
            ip=data.get("ip") or None,
            hostname=data.get("hostname") or None,
            networks=[n for n in networks if isinstance(n, dict)] if isinstance(networks, list) else [],
            extra={k: v for k, v in data.items() if k not in _KNOWN_KEYS},
            source=source,
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = dict(self.extra)
        data.update(
            {
                "user": self.user,
                "password": self.password,
                "token": self.token,
                "networks": list(self.networks),
            }
        )
        if self.ip is not None:
            data["ip"] = self.ip
        if self.hostname is not None:
            data["hostname"] = self.hostname
        return data


__all__ = ["UserConfig"]
