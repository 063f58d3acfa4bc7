"""
CLEO setup core.

- bundle: setup string decoding and the SetupBundle model
- environment: environment variable form of the configuration
- document: TOML configuration document merge
"""

from .bundle import (
    AuthConfig,
    AuthDisabled,
    AuthEnabled,
    Certificate,
    MissingHostError,
    SetupBundle,
    SetupStringDecodeError,
    decode,
    encode,
    require_host,
)
from .document import ConfigurationDocumentError, load_document, merge, prepare_configuration
from .environment import render_environment, to_environment_assignments

__all__ = [
    "AuthConfig",
    "AuthDisabled",
    "AuthEnabled",
    "Certificate",
    "MissingHostError",
    "SetupBundle",
    "SetupStringDecodeError",
    "decode",
    "encode",
    "require_host",
    "ConfigurationDocumentError",
    "load_document",
    "merge",
    "prepare_configuration",
    "render_environment",
    "to_environment_assignments",
]
