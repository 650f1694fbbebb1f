"""Azure CLI automation helpers."""

from __future__ import annotations

from .auth import (
    MANAGEMENT_RESOURCE,
    ensure_connected,
    ensure_subscription_connected,
    ensure_tenant_connected,
    get_access_token,
    get_current_session,
    validate_subscription,
)
from .deployment import build_deployment_name
from .errors import ArgumentNullError, CliError, CommandError
from .groups import ensure_resource_group
from .models import AzureSession, Credential, ResourceGroup, ServerRecord
from .servers import load_server_credentials, load_server_records

__version__ = "0.1.0"

__all__ = [
    "MANAGEMENT_RESOURCE",
    "ArgumentNullError",
    "AzureSession",
    "CliError",
    "CommandError",
    "Credential",
    "ResourceGroup",
    "ServerRecord",
    "build_deployment_name",
    "ensure_connected",
    "ensure_resource_group",
    "ensure_subscription_connected",
    "ensure_tenant_connected",
    "get_access_token",
    "get_current_session",
    "load_server_credentials",
    "load_server_records",
    "validate_subscription",
]
