"""Azure CLI session, subscription and token helpers."""

from __future__ import annotations

from pathlib import Path

from .az_client import az_json, looks_like_not_logged_in, run_az
from .errors import ArgumentNullError, CliError, CommandError
from .models import AzureSession
from .output import Reporter, default_reporter

MANAGEMENT_RESOURCE = "https://management.core.windows.net/"


def get_current_session(
    *,
    reporter: Reporter | None = None,
    azure_config_dir: Path | None = None,
) -> AzureSession | None:
    """Return the active ``az account show`` context, or ``None`` when nobody is signed in."""
    try:
        account = az_json(["account", "show", "--output", "json"], azure_config_dir=azure_config_dir)
    except CommandError as exc:
        if not looks_like_not_logged_in(exc.details):
            raise
        if reporter is not None:
            reporter.warning(f"No active Azure CLI session found: {exc.details}")
        return None

    session = AzureSession.from_dict(account)
    if not session.subscription_id or not session.tenant_id:
        raise CliError("Unable to resolve subscription id or tenant id from az account context.")
    return session


def login(
    *,
    tenant_id: str | None = None,
    use_device_code: bool = False,
    azure_config_dir: Path | None = None,
) -> None:
    args = ["login"]
    if tenant_id:
        args.extend(["--tenant", tenant_id])
    if use_device_code:
        args.append("--use-device-code")
    args.extend(["--output", "none"])
    # Sign-in prompts must reach the terminal.
    run_az(args, azure_config_dir=azure_config_dir, check=True, capture_output=False)


def ensure_connected(
    *,
    tenant_id: str | None = None,
    subscription_id: str | None = None,
    use_device_code: bool = False,
    reporter: Reporter | None = None,
    azure_config_dir: Path | None = None,
) -> AzureSession:
    """Make sure the Azure CLI is signed in to the requested tenant or subscription.

    An existing matching session is reused; otherwise an interactive sign-in is
    started and the resulting context is verified against the request.
    """
    reporter = reporter or default_reporter()
    if bool(tenant_id) == bool(subscription_id):
        raise CliError("Provide exactly one of a tenant id or a subscription id.")

    if tenant_id:
        target_label = f"tenant '{tenant_id}'"
    else:
        target_label = f"subscription '{subscription_id}'"

    def matches(session: AzureSession) -> bool:
        if tenant_id:
            return session.matches_tenant(tenant_id)
        return session.matches_subscription(subscription_id or "")

    current = get_current_session(reporter=reporter, azure_config_dir=azure_config_dir)
    if current is not None:
        reporter.debug_detail(
            f"Current session: subscription '{current.subscription_id}', tenant '{current.tenant_id}'."
        )
        if matches(current):
            reporter.info(f"Already connected to {target_label}.")
            return current

    reporter.info(f"Signing in to {target_label}.")
    login(tenant_id=tenant_id, use_device_code=use_device_code, azure_config_dir=azure_config_dir)
    if subscription_id:
        run_az(
            ["account", "set", "--subscription", subscription_id],
            azure_config_dir=azure_config_dir,
            check=True,
            capture_output=True,
        )

    session = get_current_session(azure_config_dir=azure_config_dir)
    if session is None or not matches(session):
        actual = "no active session"
        if session is not None:
            actual = f"tenant '{session.tenant_id}', subscription '{session.subscription_id}'"
        raise CliError(f"Sign-in completed, but the Azure CLI is not connected to {target_label} ({actual}).")
    return session


def ensure_tenant_connected(tenant_id: str, **kwargs) -> AzureSession:
    return ensure_connected(tenant_id=tenant_id, **kwargs)


def ensure_subscription_connected(subscription_id: str, **kwargs) -> AzureSession:
    return ensure_connected(subscription_id=subscription_id, **kwargs)


def validate_subscription(
    expected_name: str,
    session: AzureSession | None = None,
    *,
    reporter: Reporter | None = None,
    azure_config_dir: Path | None = None,
) -> bool:
    """Check the session's subscription name against ``expected_name``.

    Note the polarity: an error is reported and ``False`` returned when the
    names are equal, ``True`` when they differ. Existing callers depend on it.
    """
    reporter = reporter or default_reporter()
    if session is None:
        session = get_current_session(reporter=reporter, azure_config_dir=azure_config_dir)
        if session is None:
            raise CliError("Azure CLI is not signed in. Run: az login")

    if session.subscription_name == expected_name:
        reporter.error(
            f"Subscription mismatch: expected '{expected_name}', "
            f"session is bound to '{session.subscription_name}'."
        )
        return False
    return True


def get_access_token(
    session: AzureSession | None,
    resource: str = MANAGEMENT_RESOURCE,
    *,
    azure_config_dir: Path | None = None,
) -> str:
    if session is None:
        raise ArgumentNullError("session")

    payload = az_json(
        [
            "account",
            "get-access-token",
            "--resource",
            resource or MANAGEMENT_RESOURCE,
            "--subscription",
            session.subscription_id,
            "--output",
            "json",
        ],
        azure_config_dir=azure_config_dir,
    )
    token = str(payload.get("accessToken", "")).strip() if isinstance(payload, dict) else ""
    if not token:
        raise CliError(f"Azure CLI did not return an access token for '{resource}'.")
    return token
