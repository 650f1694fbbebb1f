"""Resource group helpers."""

from __future__ import annotations

import os
from pathlib import Path

from .az_client import az_json, looks_like_resource_group_not_found
from .errors import CliError, CommandError
from .models import ResourceGroup
from .output import Reporter, default_reporter

LOCATION_ENV = "AZURE_DEFAULTS_LOCATION"
AZURE_LOCATION_HINTS = ["eastus", "westus2", "centralus", "canadacentral", "westeurope"]


def resolve_default_location_from_cli_profile(*, azure_config_dir: Path | None = None) -> str | None:
    try:
        payload = az_json(
            ["config", "get", "defaults.location", "--output", "json"],
            azure_config_dir=azure_config_dir,
        )
    except (CliError, CommandError):
        return None

    if isinstance(payload, list):
        for item in payload:
            if not isinstance(item, dict):
                continue
            name = str(item.get("name", "")).strip().lower()
            value = str(item.get("value", "")).strip()
            if name in {"location", "defaults.location"} and value:
                return value

    if isinstance(payload, dict):
        value = str(payload.get("value", "")).strip()
        if value:
            return value

    return None


def require_location(location: str | None, *, azure_config_dir: Path | None = None) -> str:
    if location and location.strip():
        return location.strip()

    from_cli_profile = resolve_default_location_from_cli_profile(azure_config_dir=azure_config_dir)
    if from_cli_profile:
        return from_cli_profile

    from_env = os.environ.get(LOCATION_ENV, "").strip()
    if from_env:
        return from_env

    hints = ", ".join(AZURE_LOCATION_HINTS)
    raise CliError(f"Creating a resource group requires a location. Examples: {hints}.")


def get_resource_group(
    name: str,
    *,
    subscription: str | None = None,
    azure_config_dir: Path | None = None,
) -> ResourceGroup | None:
    args = ["group", "show", "--name", name, "--output", "json"]
    if subscription:
        args.extend(["--subscription", subscription])
    try:
        payload = az_json(args, azure_config_dir=azure_config_dir)
    except CommandError as exc:
        if looks_like_resource_group_not_found(exc.details, name):
            return None
        raise
    return ResourceGroup.from_dict(payload)


def create_resource_group(
    name: str,
    location: str,
    *,
    subscription: str | None = None,
    tags: dict[str, str] | None = None,
    azure_config_dir: Path | None = None,
) -> ResourceGroup:
    args = ["group", "create", "--name", name, "--location", location, "--output", "json"]
    if subscription:
        args.extend(["--subscription", subscription])
    if tags:
        args.append("--tags")
        args.extend(f"{key}={value}" for key, value in tags.items())
    return ResourceGroup.from_dict(az_json(args, azure_config_dir=azure_config_dir))


def ensure_resource_group(
    name: str,
    location: str | None = None,
    *,
    subscription: str | None = None,
    tags: dict[str, str] | None = None,
    reporter: Reporter | None = None,
    azure_config_dir: Path | None = None,
) -> ResourceGroup:
    """Return the named resource group, creating it when it does not exist yet.

    An existing group is returned untouched (its location and tags are not
    reconciled) and a warning is reported. Creation failures propagate as
    ``CommandError``.
    """
    reporter = reporter or default_reporter()
    if not name or not name.strip():
        raise CliError("A resource group name is required.")
    name = name.strip()

    existing = get_resource_group(name, subscription=subscription, azure_config_dir=azure_config_dir)
    if existing is not None:
        reporter.warning(f"Resource group '{name}' already exists.")
        return existing

    resolved_location = require_location(location, azure_config_dir=azure_config_dir)
    reporter.info(f"Creating resource group '{name}' in '{resolved_location}'.")
    return create_resource_group(
        name,
        resolved_location,
        subscription=subscription,
        tags=tags,
        azure_config_dir=azure_config_dir,
    )
