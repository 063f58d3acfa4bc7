"""Shared pytest configuration and fixtures for the CLEO setup test suite.

This module provides:
- An isolated home, config and log directory for every test
- Sample certificates and setup bundles
- Test markers
"""
import base64
import json
import sys
import zlib
from pathlib import Path

import pytest


# Add src/ to path so test modules can import the cleo_setup package
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from cleo_setup.setup import AuthDisabled, AuthEnabled, Certificate, SetupBundle  # noqa: E402


PEM_STRING = """-----BEGIN RSA PUBLIC KEY-----
MIIBPQIBAAJBAOsfi5AGYhdRs/x6q5H7kScxA0Kzzqe6WI6gf6+tc6IvKQJo5rQc
dWWSQ0nRGt2hOPDO+35NKhQEjBQxPh/v7n0CAwEAAQJBAOGaBAyuw0ICyENy5NsO
2gkT00AWTSzM9Zns0HedY31yEabkuFvrMCHjscEF7u3Y6PB7An3IzooBHchsFDei
AAECIQD/JahddzR5K3A6rzTidmAf1PBtqi7296EnWv8WvpfAAQIhAOvowIXZI4Un
DXjgZ9ekuUjZN+GUQRAVlkEEohGLVy59AiEA90VtqDdQuWWpvJX0cM08V10tLXrT
TTGsEtITid1ogAECIQDAaFl90ZgS5cMrL3wCeatVKzVUmuJmB/VAmlLFFGzK0QIh
ANJGc7AFk4fyFD/OezhwGHbWmo/S+bfeAiIh2Ss2FxKJ
-----END RSA PUBLIC KEY-----
"""

CLEO_ID = "4c1e2f6a-9d7b-4c3e-8a51-2f0d6b9e7a13"


def _encode_payload(payload) -> str:
    raw = json.dumps(payload).encode("utf-8")
    return base64.urlsafe_b64encode(zlib.compress(raw)).decode("ascii").rstrip("=")


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch, mocker):
    """Keep config files and logs of every test inside tmp_path."""
    mocker.patch("platform.system", return_value="Linux")
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    monkeypatch.delenv("OPENDUT_CLEO_SETUP_LOG_LEVEL", raising=False)

    from cleo_setup.logging import setup_logging
    setup_logging(force_reconfigure=True)
    return tmp_path


@pytest.fixture
def pem_string():
    return PEM_STRING


@pytest.fixture
def certificate():
    return Certificate.from_pem(PEM_STRING)


@pytest.fixture
def disabled_bundle(certificate):
    """Bundle for a CARL without authentication."""
    return SetupBundle(
        carl="https://carl:1234/",
        ca=certificate,
        auth_config=AuthDisabled(),
    )


@pytest.fixture
def enabled_bundle(certificate):
    """Bundle for a CARL with OIDC authentication."""
    return SetupBundle(
        carl="https://carl:1234/",
        ca=certificate,
        auth_config=AuthEnabled(
            issuer_url="https://auth:1234/",
            client_id="testClient",
            client_secret="secret",
            scopes=(),
        ),
    )


@pytest.fixture
def payload(pem_string):
    """Decoded form of a valid setup string."""
    return {
        "id": CLEO_ID,
        "carl": "https://carl.example.com:8443/",
        "ca": pem_string,
        "auth_config": {
            "Enabled": {
                "issuer_url": "https://keycloak.example.com/realms/opendut",
                "client_id": "opendut-cleo-client",
                "client_secret": "918642e0-4ec4-4ef5-8ae0-ba92de7da3f9",
                "scopes": ["openid", "profile"],
            }
        },
    }


def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test (fast, isolated)"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test (slower)"
    )


def pytest_collection_modifyitems(config, items):
    """Auto-mark tests based on their location."""
    for item in items:
        if "integration" not in item.nodeid:
            item.add_marker(pytest.mark.unit)


@pytest.fixture
def encode_payload():
    """Encode an arbitrary JSON payload the way CARL encodes setup strings."""
    return _encode_payload
