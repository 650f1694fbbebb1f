"""Typed data models for Azure CLI payloads and server records."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

REDACTED = "***REDACTED***"


@dataclass
class ResourceGroup:
    name: str
    location: str
    id: str = ""
    provisioning_state: str = ""
    tags: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ResourceGroup":
        properties = data.get("properties") or {}
        return cls(
            name=str(data.get("name", "")),
            location=str(data.get("location", "")),
            id=str(data.get("id", "")),
            provisioning_state=str(properties.get("provisioningState", "")),
            tags={str(k): str(v) for k, v in (data.get("tags") or {}).items()},
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "location": self.location,
            "properties": {"provisioningState": self.provisioning_state},
            "tags": dict(self.tags),
        }


@dataclass
class AzureSession:
    """The signed-in Azure CLI context: identity bound to a tenant and subscription."""

    subscription_id: str
    subscription_name: str
    tenant_id: str
    user_name: str = ""
    user_type: str = ""
    environment_name: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AzureSession":
        user = data.get("user") or {}
        return cls(
            subscription_id=str(data.get("id", "")).strip(),
            subscription_name=str(data.get("name", "")),
            tenant_id=str(data.get("tenantId", "")).strip(),
            user_name=str(user.get("name", "")),
            user_type=str(user.get("type", "")),
            environment_name=str(data.get("environmentName", "")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.subscription_id,
            "name": self.subscription_name,
            "tenantId": self.tenant_id,
            "user": {"name": self.user_name, "type": self.user_type},
            "environmentName": self.environment_name,
        }

    def matches_tenant(self, tenant_id: str) -> bool:
        return self.tenant_id.lower() == tenant_id.strip().lower()

    def matches_subscription(self, subscription_id: str) -> bool:
        return self.subscription_id.lower() == subscription_id.strip().lower()


@dataclass(frozen=True)
class Credential:
    username: str
    password: str = field(repr=False)

    def to_dict(self, *, reveal: bool = False) -> dict[str, str]:
        return {
            "username": self.username,
            "password": self.password if reveal else REDACTED,
        }


# Accepted spellings per field, first match wins.
SERVER_FIELD_ALIASES = {
    "name": ("name", "Name", "serverName", "ServerName"),
    "hostname": ("hostname", "hostName", "HostName", "host"),
    "username": ("username", "userName", "UserName", "user"),
    "secret_name": ("secret_name", "secretName", "SecretName", "secret"),
}


@dataclass
class ServerRecord:
    name: str
    hostname: str
    username: str
    secret_name: str
    password: str | None = field(default=None, repr=False)
    credential: Credential | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ServerRecord":
        values: dict[str, str] = {}
        missing: list[str] = []
        for attr, aliases in SERVER_FIELD_ALIASES.items():
            raw = next((data[alias] for alias in aliases if data.get(alias) not in (None, "")), None)
            if raw is None:
                missing.append(attr)
                continue
            values[attr] = str(raw).strip()
        if missing:
            raise ValueError(f"missing required field(s): {', '.join(missing)}")
        return cls(**values)

    def with_secret(self, secret: str) -> "ServerRecord":
        return ServerRecord(
            name=self.name,
            hostname=self.hostname,
            username=self.username,
            secret_name=self.secret_name,
            password=secret,
            credential=Credential(self.username, secret),
        )

    def to_dict(self, *, reveal: bool = False) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "name": self.name,
            "hostname": self.hostname,
            "username": self.username,
            "secret_name": self.secret_name,
        }
        if self.password is not None:
            payload["password"] = self.password if reveal else REDACTED
        if self.credential is not None:
            payload["credential"] = self.credential.to_dict(reveal=reveal)
        return payload
