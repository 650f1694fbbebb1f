"""Server inventory loading and Key Vault credential lookup."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterator

import yaml

from .az_client import az_json
from .errors import CliError, CommandError
from .models import ServerRecord
from .output import Reporter, default_reporter

YAML_SUFFIXES = {".yaml", ".yml"}


def read_server_document(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    try:
        if path.suffix.lower() in YAML_SUFFIXES:
            return yaml.safe_load(text)
        return json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise CliError(f"Unable to parse server file '{path}': {exc}") from exc


def load_server_records(path: str | Path) -> list[ServerRecord]:
    server_file = Path(path).expanduser()
    if not server_file.is_file():
        raise CliError(f"Server file '{server_file}' does not exist.")

    document = read_server_document(server_file)
    if isinstance(document, dict):
        document = document.get("servers")
    if not isinstance(document, list):
        raise CliError(f"Server file '{server_file}' must contain a list of server records.")

    records: list[ServerRecord] = []
    for index, entry in enumerate(document):
        if not isinstance(entry, dict):
            raise CliError(f"Server file '{server_file}': entry {index} is not a mapping.")
        try:
            records.append(ServerRecord.from_dict(entry))
        except ValueError as exc:
            raise CliError(f"Server file '{server_file}': entry {index} is {exc}.") from exc
    return records


def get_secret_value(
    vault_name: str,
    secret_name: str,
    *,
    azure_config_dir: Path | None = None,
) -> str:
    # JSON output keeps leading and trailing whitespace in the secret value.
    value = az_json(
        [
            "keyvault",
            "secret",
            "show",
            "--vault-name",
            vault_name,
            "--name",
            secret_name,
            "--query",
            "value",
            "--output",
            "json",
        ],
        azure_config_dir=azure_config_dir,
    )
    if not isinstance(value, str):
        raise CliError(f"Secret '{secret_name}' in vault '{vault_name}' has no string value.")
    return value


def load_server_credentials(
    path: str | Path,
    vault_name: str,
    server_name: str | None = None,
    *,
    reporter: Reporter | None = None,
    azure_config_dir: Path | None = None,
) -> Iterator[ServerRecord]:
    """Load server records and attach their Key Vault passwords.

    The file is read and validated up front. Secrets are fetched lazily as the
    returned iterator is consumed; a record whose secret cannot be read is
    yielded without ``password``/``credential`` after a warning.
    """
    reporter = reporter or default_reporter()
    if not vault_name or not vault_name.strip():
        raise CliError("A Key Vault name is required.")

    records = load_server_records(path)
    if server_name:
        wanted = server_name.strip().casefold()
        records = [record for record in records if record.name.casefold() == wanted]
        reporter.debug_detail(f"{len(records)} server record(s) match '{server_name}'.")

    return _iter_server_credentials(records, vault_name.strip(), reporter, azure_config_dir)


def _iter_server_credentials(
    records: list[ServerRecord],
    vault_name: str,
    reporter: Reporter,
    azure_config_dir: Path | None,
) -> Iterator[ServerRecord]:
    for record in records:
        try:
            secret = get_secret_value(vault_name, record.secret_name, azure_config_dir=azure_config_dir)
        except (CommandError, CliError) as exc:
            details = exc.details if isinstance(exc, CommandError) else str(exc)
            reporter.warning(
                f"Unable to read secret '{record.secret_name}' for server '{record.name}' "
                f"from vault '{vault_name}': {details}"
            )
            yield record
            continue
        yield record.with_secret(secret)
