"""Shared fixtures."""
import io

import pytest

from az_fakes import FakeAz
from azops_pkg import az_client
from azops_pkg.output import Reporter


@pytest.fixture
def fake_az(monkeypatch):
    fake = FakeAz()
    monkeypatch.setattr(az_client.subprocess, "run", fake)
    monkeypatch.delenv("AZOPS_AZ_EXECUTABLE", raising=False)
    monkeypatch.delenv("AZURE_DEFAULTS_LOCATION", raising=False)
    monkeypatch.delenv("AZOPS_VERBOSE", raising=False)
    return fake


@pytest.fixture
def diag():
    return io.StringIO()


@pytest.fixture
def reporter(diag):
    return Reporter(stream=diag)
