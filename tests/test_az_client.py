"""Tests for azops_pkg.az_client and azops_pkg.output."""
import json

import pytest

from az_fakes import fail, ok
from azops_pkg import az_client
from azops_pkg.az_client import (
    az_json,
    config_value_is_false,
    looks_like_not_logged_in,
    looks_like_resource_group_not_found,
    redact_command_for_logs,
)
from azops_pkg.errors import CliError, CommandError
from azops_pkg.output import Reporter, apply_query_to_payload, format_payload_for_output, normalize_output_name


def test_redact_command_for_logs():
    cmd = ["az", "login", "--service-principal", "--password", "hunter2", "--client-secret=abc", "--tenant", "t"]
    assert redact_command_for_logs(cmd) == (
        "az login --service-principal --password ***REDACTED*** --client-secret=***REDACTED*** --tenant t"
    )


@pytest.mark.parametrize(
    "message,expected",
    [
        ("(ResourceGroupNotFound) Resource group 'x' could not be found.", True),
        ("Resource group 'rg-App' could not be found.", True),
        ("Resource group 'other' could not be found.", False),
        ("Subscription 'bogus' not found. Check the spelling and casing and try again.", False),
        ("(AuthorizationFailed) The client does not have authorization", False),
    ],
)
def test_looks_like_resource_group_not_found(message, expected):
    assert looks_like_resource_group_not_found(message, "rg-app") is expected


@pytest.mark.parametrize(
    "message,expected",
    [
        ("Please run 'az login' to setup account.", True),
        ("No subscription found. Run 'az account set' to select a subscription.", True),
        ("Subscription 'x' not found.", False),
    ],
)
def test_looks_like_not_logged_in(message, expected):
    assert looks_like_not_logged_in(message) is expected


def test_config_value_is_false():
    assert config_value_is_false(" Off ")
    assert not config_value_is_false("1")
    assert not config_value_is_false(None)


def test_az_json_parses_output(fake_az):
    fake_az.on(("group", "list"), ok([{"name": "a"}]))
    assert az_json(["group", "list"]) == [{"name": "a"}]


def test_az_json_empty_output_is_empty_mapping(fake_az):
    fake_az.on(("group", "delete"), ok())
    assert az_json(["group", "delete"]) == {}


def test_az_json_rejects_non_json(fake_az):
    fake_az.on(("version",), ok("not json"))
    with pytest.raises(CliError):
        az_json(["version"])


def test_az_json_failure_keeps_process_details(fake_az):
    fake_az.on(("keyvault",), fail("Forbidden", returncode=2))
    with pytest.raises(CommandError) as excinfo:
        az_json(["keyvault", "secret", "show"])
    assert excinfo.value.returncode == 2
    assert excinfo.value.cmd[1:] == ["keyvault", "secret", "show"]
    assert excinfo.value.details == "ERROR: Forbidden"


def test_executable_override(fake_az, monkeypatch):
    seen = []
    monkeypatch.setenv("AZOPS_AZ_EXECUTABLE", "/opt/az/bin/az")
    fake_az.on(("version",), ok({}))
    original = fake_az.__call__

    def spy(cmd, **kwargs):
        seen.append(cmd[0])
        return original(cmd, **kwargs)

    monkeypatch.setattr(az_client.subprocess, "run", spy)
    az_json(["version"])
    assert seen == ["/opt/az/bin/az"]


def test_reporter_levels(diag):
    reporter = Reporter(enabled=False, verbose=True, stream=diag)
    reporter.info("hidden")
    reporter.debug_detail("hidden too")
    reporter.warning("shown")
    reporter.error("also shown")
    assert diag.getvalue().splitlines() == ["WARNING: [azops] shown", "ERROR: [azops] also shown"]


def test_reporter_verbose_detail(diag):
    reporter = Reporter(verbose=True, stream=diag)
    reporter.debug_detail("details")
    assert diag.getvalue() == "INFO: [azops] [debug] details\n"


def test_output_formats():
    payload = [{"name": "a", "ok": True}, {"name": "b", "ok": False}]
    assert json.loads(format_payload_for_output(payload, "json")) == payload
    assert format_payload_for_output(payload, "tsv") == "a\ttrue\nb\tfalse"
    assert format_payload_for_output(payload, "none") is None
    assert format_payload_for_output({"name": "a"}, "yaml") == "name: a"
    table = format_payload_for_output(payload, "table").splitlines()
    assert table[0].split() == ["name", "ok"]


def test_query_and_output_validation():
    assert apply_query_to_payload([{"name": "a"}, {"name": "b"}], "[].name") == ["a", "b"]
    with pytest.raises(CliError):
        apply_query_to_payload({}, "[?")
    with pytest.raises(CliError):
        normalize_output_name("xml")
