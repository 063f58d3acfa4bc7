"""
Global constants for the CLEO setup CLI.
"""

# Component the setup string configures
COMPONENT_NAME = "cleo"

# CARL connection defaults
DEFAULT_CARL_PORT = 443

# Environment variables emitted in ephemeral mode
ENV_PREFIX = "OPENDUT_CLEO_NETWORK_"
ENV_TLS_DOMAIN_NAME_OVERRIDE = f"{ENV_PREFIX}TLS_DOMAIN_NAME_OVERRIDE"
ENV_TLS_CA_CONTENT = f"{ENV_PREFIX}TLS_CA_CONTENT"
ENV_CARL_HOST = f"{ENV_PREFIX}CARL_HOST"
ENV_CARL_PORT = f"{ENV_PREFIX}CARL_PORT"
ENV_OIDC_ENABLED = f"{ENV_PREFIX}OIDC_ENABLED"
ENV_OIDC_CLIENT_ISSUER_URL = f"{ENV_PREFIX}OIDC_CLIENT_ISSUER_URL"
ENV_OIDC_CLIENT_ID = f"{ENV_PREFIX}OIDC_CLIENT_ID"
ENV_OIDC_CLIENT_SECRET = f"{ENV_PREFIX}OIDC_CLIENT_SECRET"
ENV_OIDC_CLIENT_SCOPES = f"{ENV_PREFIX}OIDC_CLIENT_SCOPES"

# Settings locations
SETTINGS_DIR_NAME = "opendut"
SYSTEM_SETTINGS_DIR = "/etc/opendut"
CONFIG_FILE_NAME = "config.toml"

# Logging constants
LOG_APP_NAME = "CLEO setup"
LOG_FILE_NAME = "cleo"
LOG_RETENTION_DAYS = 7
LOG_LEVEL_ENV_VAR = "OPENDUT_CLEO_SETUP_LOG_LEVEL"

# Sensitive data keys for sanitization
SENSITIVE_KEYS = (
    "password", "token", "secret", "client_secret", "private_key",
    "authorization", "setup_string", "api_key", "bearer", "cookie"
)
