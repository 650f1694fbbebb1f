"""Command handlers and dispatch for azops."""

from __future__ import annotations

import argparse
import sys

from .auth import ensure_connected, get_access_token, get_current_session, validate_subscription
from .az_client import env_flag_enabled, redact_command_for_logs
from .deployment import build_deployment_name
from .errors import CliError, CommandError
from .groups import ensure_resource_group
from .output import VERBOSE_ENV, Reporter, emit_output, normalize_output_name
from .parser import (
    parse_account_connect_args,
    parse_account_token_args,
    parse_account_validate_args,
    parse_deployment_name_args,
    parse_group_ensure_args,
    parse_servers_credentials_args,
    tool_command,
)
from .servers import load_server_credentials


def reporter_for(args: argparse.Namespace) -> Reporter:
    return Reporter(
        enabled=not bool(getattr(args, "only_show_errors", False)),
        verbose=bool(getattr(args, "verbose", False)) or env_flag_enabled(VERBOSE_ENV),
    )


def cmd_group_ensure(args: argparse.Namespace) -> int:
    output_name = normalize_output_name(args.output)
    group = ensure_resource_group(
        args.name,
        args.location,
        subscription=args.subscription,
        tags=args.tags,
        reporter=reporter_for(args),
    )
    emit_output(group.to_dict(), output=output_name, query=args.query)
    return 0


def cmd_deployment_name(args: argparse.Namespace) -> int:
    output_name = normalize_output_name(args.output)
    name = build_deployment_name(resource_group_name=args.resource_group, deployment_name=args.name)
    emit_output(name, output=output_name, query=args.query)
    return 0


def cmd_account_validate(args: argparse.Namespace) -> int:
    output_name = normalize_output_name(args.output)
    valid = validate_subscription(args.expected_name, reporter=reporter_for(args))
    emit_output(valid, output=output_name, query=args.query)
    return 0 if valid else 1


def cmd_account_token(args: argparse.Namespace) -> int:
    output_name = normalize_output_name(args.output)
    reporter = reporter_for(args)
    session = get_current_session(reporter=reporter)
    kwargs = {"resource": args.resource} if args.resource else {}
    token = get_access_token(session, **kwargs)
    emit_output(token, output=output_name, query=args.query)
    return 0


def cmd_account_connect(args: argparse.Namespace) -> int:
    output_name = normalize_output_name(args.output)
    session = ensure_connected(
        tenant_id=args.tenant,
        subscription_id=args.subscription,
        use_device_code=args.use_device_code,
        reporter=reporter_for(args),
    )
    emit_output(session.to_dict(), output=output_name, query=args.query)
    return 0


def cmd_servers_credentials(args: argparse.Namespace) -> int:
    output_name = normalize_output_name(args.output)
    records = load_server_credentials(
        args.path,
        args.vault_name,
        args.server_name,
        reporter=reporter_for(args),
    )
    payload = [record.to_dict(reveal=args.show_secrets) for record in records]
    emit_output(payload, output=output_name, query=args.query)
    return 0


COMMANDS = {
    ("group", "ensure"): (parse_group_ensure_args, cmd_group_ensure),
    ("deployment", "name"): (parse_deployment_name_args, cmd_deployment_name),
    ("account", "validate"): (parse_account_validate_args, cmd_account_validate),
    ("account", "token"): (parse_account_token_args, cmd_account_token),
    ("account", "connect"): (parse_account_connect_args, cmd_account_connect),
    ("servers", "credentials"): (parse_servers_credentials_args, cmd_servers_credentials),
}


def help_text() -> str:
    return "\n".join(
        [
            "Azure CLI automation helpers.",
            "",
            "Usage:",
            f"  {tool_command('group ensure --name <rg-name> [--location <location>]')}",
            f"  {tool_command('deployment name (--resource-group <rg-name> | --name <base-name>)')}",
            f"  {tool_command('account validate --expected-name <subscription-name>')}",
            f"  {tool_command('account token [--resource <audience>]')}",
            f"  {tool_command('account connect (--tenant <tenant-id> | --subscription <subscription-id>)')}",
            f"  {tool_command('servers credentials --path <file> --vault-name <vault> [--server-name <name>]')}",
        ]
    )


def dispatch(argv: list[str]) -> int:
    if len(argv) < 2 or (argv[0], argv[1]) not in COMMANDS:
        raise CliError(f"Unknown command '{' '.join(argv[:2])}'.\n\n{help_text()}")
    parse_args, handler = COMMANDS[(argv[0], argv[1])]
    return handler(parse_args(argv[2:]))


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    try:
        if not argv or argv[0] in {"-h", "--help", "help"}:
            print(help_text())
            return 0
        return dispatch(argv)
    except CliError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 1
    except CommandError as exc:
        cmd_text = redact_command_for_logs(exc.cmd)
        print(f"ERROR: Command failed: {cmd_text}\n{exc.details}", file=sys.stderr)
        return exc.returncode or 1
