"""Argument parsers for the azops commands."""

from __future__ import annotations

import argparse

from .errors import CliError

TOOL_NAME = "azops"


def tool_command(args: str = "") -> str:
    return f"{TOOL_NAME} {args}".strip()


def add_global_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--output", "-o", default="json")
    parser.add_argument("--query")
    parser.add_argument("--only-show-errors", action="store_true")
    parser.add_argument("--verbose", action="store_true")


def _parse(parser: argparse.ArgumentParser, raw_args: list[str], usage: str) -> argparse.Namespace:
    add_global_arguments(parser)
    parsed, unknown = parser.parse_known_args(raw_args)
    if unknown:
        joined = " ".join(unknown)
        raise CliError(
            f"Unsupported arguments for '{parser.prog}': {joined}. "
            f"Use '{tool_command(usage)} [--output <format>] [--query <jmespath>]'."
        )
    return parsed


def parse_tags(raw_tags: list[str] | None) -> dict[str, str]:
    tags: dict[str, str] = {}
    for token in raw_tags or []:
        key, _sep, value = token.partition("=")
        key = key.strip()
        if not key:
            raise CliError(f"Invalid tag '{token}'. Use key[=value].")
        tags[key] = value.strip()
    return tags


def parse_group_ensure_args(raw_args: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog=tool_command("group ensure"), add_help=True)
    parser.add_argument("--name", "--resource-group", "-g", "-n", dest="name")
    parser.add_argument("--location", "-l")
    parser.add_argument("--subscription", "-s")
    parser.add_argument("--tags", nargs="*")
    parsed = _parse(
        parser,
        raw_args,
        "group ensure --name <rg-name> [--location <location>] [--subscription <id>] [--tags key=value ...]",
    )
    if not parsed.name:
        raise CliError(f"{tool_command('group ensure')} requires --name <rg-name>.")
    parsed.tags = parse_tags(parsed.tags)
    return parsed


def parse_deployment_name_args(raw_args: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog=tool_command("deployment name"), add_help=True)
    parser.add_argument("--resource-group", "-g", dest="resource_group")
    parser.add_argument("--name", "-n", dest="name")
    parsed = _parse(parser, raw_args, "deployment name (--resource-group <rg-name> | --name <base-name>)")
    if bool(parsed.resource_group) == bool(parsed.name):
        raise CliError(f"{tool_command('deployment name')} requires exactly one of --resource-group or --name.")
    return parsed


def parse_account_validate_args(raw_args: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog=tool_command("account validate"), add_help=True)
    parser.add_argument("--expected-name", dest="expected_name")
    parsed = _parse(parser, raw_args, "account validate --expected-name <subscription-name>")
    if not parsed.expected_name:
        raise CliError(f"{tool_command('account validate')} requires --expected-name <subscription-name>.")
    return parsed


def parse_account_token_args(raw_args: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog=tool_command("account token"), add_help=True)
    parser.add_argument("--resource")
    return _parse(parser, raw_args, "account token [--resource <audience>]")


def parse_account_connect_args(raw_args: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog=tool_command("account connect"), add_help=True)
    parser.add_argument("--tenant", "-t")
    parser.add_argument("--subscription", "-s")
    parser.add_argument("--use-device-code", action="store_true")
    parsed = _parse(
        parser,
        raw_args,
        "account connect (--tenant <tenant-id> | --subscription <subscription-id>) [--use-device-code]",
    )
    if bool(parsed.tenant) == bool(parsed.subscription):
        raise CliError(f"{tool_command('account connect')} requires exactly one of --tenant or --subscription.")
    return parsed


def parse_servers_credentials_args(raw_args: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog=tool_command("servers credentials"), add_help=True)
    parser.add_argument("--path")
    parser.add_argument("--vault-name")
    parser.add_argument("--server-name")
    parser.add_argument("--show-secrets", action="store_true")
    parsed = _parse(
        parser,
        raw_args,
        "servers credentials --path <file> --vault-name <vault> [--server-name <name>] [--show-secrets]",
    )
    if not parsed.path or not parsed.vault_name:
        raise CliError(f"{tool_command('servers credentials')} requires --path <file> and --vault-name <vault>.")
    return parsed
