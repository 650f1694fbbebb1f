"""A scripted stand-in for the ``az`` executable."""
import json
import subprocess


class FakeAz:
    """Answers ``az`` invocations from scripted responses and records every call.

    Responses are keyed by an argument prefix (``("group", "show")``). Several
    responses for the same prefix are consumed in order; the last one repeats.
    """

    def __init__(self):
        self.calls = []
        self._responses = []

    def on(self, prefix, *responses):
        self._responses.insert(0, (tuple(prefix), list(responses)))
        return self

    def calls_for(self, *prefix):
        return [call for call in self.calls if tuple(call[: len(prefix)]) == prefix]

    def __call__(self, cmd, env=None, cwd=None, text=True, capture_output=True):
        args = list(cmd[1:])
        self.calls.append(args)
        for prefix, responses in self._responses:
            if tuple(args[: len(prefix)]) != prefix:
                continue
            response = responses.pop(0) if len(responses) > 1 else responses[0]
            returncode, stdout, stderr = response
            return subprocess.CompletedProcess(cmd, returncode, stdout, stderr)
        return subprocess.CompletedProcess(cmd, 1, "", f"ERROR: no scripted response for az {' '.join(args)}")


def ok(payload=None):
    if payload is None:
        return (0, "", "")
    if isinstance(payload, str):
        return (0, payload + "\n", "")
    return (0, json.dumps(payload), "")


def secret(value):
    return (0, json.dumps(value) + "\n", "")


def fail(message, returncode=1):
    return (returncode, "", f"ERROR: {message}\n")


def account(subscription_id="00000000-0000-0000-0000-000000000001",
            name="Prod",
            tenant_id="11111111-1111-1111-1111-111111111111"):
    return {
        "id": subscription_id,
        "name": name,
        "tenantId": tenant_id,
        "user": {"name": "ops@example.com", "type": "user"},
        "environmentName": "AzureCloud",
        "isDefault": True,
    }


NOT_LOGGED_IN = "Please run 'az login' to setup account."


def lines_at(stream, level):
    return [line for line in stream.getvalue().splitlines() if line.startswith(f"{level}:")]
