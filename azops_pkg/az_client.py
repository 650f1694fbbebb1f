"""Azure CLI execution helpers."""

from __future__ import annotations

import json
import os
import subprocess
from pathlib import Path
from typing import Any

from .errors import CliError, CommandError

AZ_EXECUTABLE_ENV = "AZOPS_AZ_EXECUTABLE"
DEFAULT_AZ_EXECUTABLE = "az"

SENSITIVE_FLAGS = {"--password", "-p", "--client-secret", "--secret", "--value"}
CONFIG_FALSE_VALUES = {"0", "false", "no", "off"}


def config_value_is_false(value: str | None) -> bool:
    if value is None:
        return False
    return value.strip().lower() in CONFIG_FALSE_VALUES


def env_flag_enabled(name: str) -> bool:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return False
    return not config_value_is_false(raw)


def az_executable() -> str:
    return os.environ.get(AZ_EXECUTABLE_ENV, "").strip() or DEFAULT_AZ_EXECUTABLE


def redact_command_for_logs(cmd: list[str]) -> str:
    redacted: list[str] = []
    redact_next = False

    for token in cmd:
        token_lower = token.lower()

        if redact_next:
            redacted.append("***REDACTED***")
            redact_next = False
            continue

        if token_lower in SENSITIVE_FLAGS:
            redacted.append(token)
            redact_next = True
            continue

        if "=" in token:
            key, _value = token.split("=", 1)
            if key.lower() in SENSITIVE_FLAGS:
                redacted.append(f"{key}=***REDACTED***")
                continue

        redacted.append(token)

    return " ".join(redacted)


def looks_like_resource_group_not_found(message: str, name: str | None = None) -> bool:
    lower = message.lower()
    if "resourcegroupnotfound" in lower:
        return True
    if name:
        return f"resource group '{name.lower()}' could not be found" in lower
    return False


def looks_like_not_logged_in(message: str) -> bool:
    lower = message.lower()
    return any(
        snippet in lower
        for snippet in (
            "az login",
            "not logged in",
            "no subscription found",
            "please run 'az login'",
            "aadsts700082",
            "refresh token has expired",
        )
    )


def az_env(azure_config_dir: Path | None = None) -> dict[str, str]:
    env = os.environ.copy()
    if azure_config_dir is not None:
        env["AZURE_CONFIG_DIR"] = str(azure_config_dir)
    return env


def run_cmd(
    cmd: list[str],
    *,
    env: dict[str, str] | None = None,
    check: bool = True,
    capture_output: bool = True,
    cwd: Path | None = None,
) -> subprocess.CompletedProcess[str]:
    process = subprocess.run(
        cmd,
        env=env,
        cwd=cwd,
        text=True,
        capture_output=capture_output,
    )
    if check and process.returncode != 0:
        raise CommandError(cmd, process.returncode, process.stdout or "", process.stderr or "")
    return process


def run_az(
    args: list[str],
    *,
    azure_config_dir: Path | None = None,
    check: bool = True,
    capture_output: bool = True,
) -> subprocess.CompletedProcess[str]:
    env = az_env(azure_config_dir)
    return run_cmd([az_executable(), *args], env=env, check=check, capture_output=capture_output)


def az_json(args: list[str], *, azure_config_dir: Path | None = None) -> Any:
    process = run_az(args, azure_config_dir=azure_config_dir, check=True, capture_output=True)
    payload = process.stdout.strip()
    if not payload:
        return {}
    try:
        return json.loads(payload)
    except json.JSONDecodeError as exc:
        raise CliError(f"Failed to parse JSON from Azure CLI output for: {' '.join(args)}") from exc
