"""Deployment name generation."""

from __future__ import annotations

import datetime as dt

from .errors import CliError

DEPLOYMENT_TIMESTAMP_FORMAT = "%Y%m%d-%H%M"


def now_utc() -> dt.datetime:
    return dt.datetime.now(dt.UTC).replace(microsecond=0)


def build_deployment_name(
    *,
    resource_group_name: str | None = None,
    deployment_name: str | None = None,
    now: dt.datetime | None = None,
) -> str:
    """Return ``<base>_<yyyyMMdd-HHmm>`` stamped with the current UTC minute.

    Exactly one of ``resource_group_name`` or ``deployment_name`` supplies the
    base. Names are unique only to the minute.
    """
    if bool(resource_group_name) == bool(deployment_name):
        raise CliError("Provide exactly one of a resource group name or a deployment name.")

    base = (resource_group_name or deployment_name or "").strip()
    if not base:
        raise CliError("Deployment base name must not be blank.")

    stamp = now or now_utc()
    if stamp.tzinfo is not None:
        stamp = stamp.astimezone(dt.UTC)
    return f"{base}_{stamp.strftime(DEPLOYMENT_TIMESTAMP_FORMAT)}"
