"""Diagnostic reporting and payload formatting."""

from __future__ import annotations

import json
import sys
from typing import Any, TextIO

import jmespath
import yaml
from jmespath.exceptions import JMESPathError

from .az_client import env_flag_enabled
from .errors import CliError

TOOL_NAME = "azops"
VERBOSE_ENV = "AZOPS_VERBOSE"

OUTPUT_VALUES = {"json", "jsonc", "none", "table", "tsv", "yaml", "yamlc"}


class Reporter:
    """Writes diagnostics to stderr so stdout carries only command payloads."""

    def __init__(
        self,
        *,
        enabled: bool = True,
        verbose: bool = False,
        stream: TextIO | None = None,
    ):
        self.enabled = enabled
        self.verbose = verbose
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stderr

    def _emit(self, level: str, message: str) -> None:
        print(f"{level}: [{TOOL_NAME}] {message}", file=self.stream, flush=True)

    def info(self, message: str) -> None:
        if self.enabled:
            self._emit("INFO", message)

    def warning(self, message: str) -> None:
        self._emit("WARNING", message)

    def error(self, message: str) -> None:
        self._emit("ERROR", message)

    def debug_detail(self, message: str) -> None:
        if self.verbose and self.enabled:
            self.info(f"[debug] {message}")


def default_reporter() -> Reporter:
    return Reporter(verbose=env_flag_enabled(VERBOSE_ENV))


def normalize_output_name(value: str | None) -> str:
    output = (value or "json").strip().lower()
    if output not in OUTPUT_VALUES:
        choices = ", ".join(sorted(OUTPUT_VALUES))
        raise CliError(f"Unsupported --output value '{output}'. Allowed values: {choices}.")
    return output


def scalar_to_cli_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return value
    return json.dumps(value, sort_keys=True)


def normalize_table_rows(payload: Any) -> tuple[list[str], list[list[str]]] | None:
    if isinstance(payload, dict):
        columns = list(payload.keys())
        rows = [[scalar_to_cli_text(payload.get(column)) for column in columns]]
        return columns, rows

    if isinstance(payload, list) and payload and all(isinstance(item, dict) for item in payload):
        columns: list[str] = []
        seen: set[str] = set()
        for item in payload:
            for key in item.keys():
                if key not in seen:
                    seen.add(key)
                    columns.append(key)
        rows = [[scalar_to_cli_text(item.get(column)) for column in columns] for item in payload]
        return columns, rows

    return None


def format_payload_as_table(payload: Any) -> str:
    normalized = normalize_table_rows(payload)
    if normalized is None:
        if isinstance(payload, list):
            return "\n".join(scalar_to_cli_text(item) for item in payload)
        return scalar_to_cli_text(payload)

    columns, rows = normalized
    widths = [len(column) for column in columns]
    for row in rows:
        for index, cell in enumerate(row):
            widths[index] = max(widths[index], len(cell))

    header = "  ".join(columns[index].ljust(widths[index]) for index in range(len(columns)))
    divider = "  ".join("-" * widths[index] for index in range(len(columns)))
    body = [
        "  ".join(row[index].ljust(widths[index]) for index in range(len(columns)))
        for row in rows
    ]
    return "\n".join([header, divider, *body])


def format_payload_as_tsv(payload: Any) -> str:
    normalized = normalize_table_rows(payload)
    if normalized is not None:
        _columns, rows = normalized
        return "\n".join("\t".join(row) for row in rows)

    if isinstance(payload, list):
        return "\n".join(scalar_to_cli_text(item) for item in payload)
    return scalar_to_cli_text(payload)


def apply_query_to_payload(payload: Any, query: str | None) -> Any:
    if not query:
        return payload
    try:
        return jmespath.search(query, payload)
    except JMESPathError as exc:
        raise CliError(f"Invalid --query expression '{query}': {exc}") from exc


def format_payload_for_output(payload: Any, output: str) -> str | None:
    if output == "none":
        return None
    if output in {"json", "jsonc"}:
        return json.dumps(payload, indent=2, sort_keys=True)
    if output in {"yaml", "yamlc"}:
        return yaml.safe_dump(payload, sort_keys=True).rstrip("\n")
    if output == "table":
        return format_payload_as_table(payload)
    if output == "tsv":
        return format_payload_as_tsv(payload)
    return json.dumps(payload, indent=2, sort_keys=True)


def emit_output(
    payload: Any,
    *,
    output: str,
    query: str | None = None,
) -> None:
    queried = apply_query_to_payload(payload, query)
    rendered = format_payload_for_output(queried, output)
    if rendered is None:
        return
    print(rendered)
