"""
Ephemeral configuration: environment variable assignments for CLEO.
"""

from typing import List, Sequence, Tuple

from cleo_setup.constants import (
    ENV_CARL_HOST,
    ENV_CARL_PORT,
    ENV_OIDC_CLIENT_ID,
    ENV_OIDC_CLIENT_ISSUER_URL,
    ENV_OIDC_CLIENT_SCOPES,
    ENV_OIDC_CLIENT_SECRET,
    ENV_OIDC_ENABLED,
    ENV_TLS_CA_CONTENT,
    ENV_TLS_DOMAIN_NAME_OVERRIDE,
)
from cleo_setup.setup.bundle import AuthEnabled, SetupBundle

Assignment = Tuple[str, str]


def _quoted(value: str) -> str:
    return f'"{value}"'


def to_environment_assignments(bundle: SetupBundle) -> List[Assignment]:
    """
    Build the environment variables that configure CLEO for one session.

    The order is fixed. Values that need quoting in a shell (the CA content
    and the scopes) are returned already wrapped in double quotes.

    Args:
        bundle: Decoded setup bundle

    Returns:
        List of (name, value) pairs

    Raises:
        MissingHostError: If the CARL URL has no host
    """
    carl_host = bundle.carl_host
    assignments = [
        (ENV_TLS_DOMAIN_NAME_OVERRIDE, carl_host),
        (ENV_TLS_CA_CONTENT, _quoted(bundle.ca.encode_as_string())),
        (ENV_CARL_HOST, carl_host),
        (ENV_CARL_PORT, str(bundle.carl_port)),
    ]

    auth_config = bundle.auth_config
    if isinstance(auth_config, AuthEnabled):
        # Scopes are left empty for ephemeral sessions
        assignments.extend([
            (ENV_OIDC_ENABLED, "true"),
            (ENV_OIDC_CLIENT_ISSUER_URL, auth_config.issuer_url),
            (ENV_OIDC_CLIENT_ID, auth_config.client_id),
            (ENV_OIDC_CLIENT_SECRET, auth_config.client_secret),
            (ENV_OIDC_CLIENT_SCOPES, _quoted("")),
        ])
    else:
        assignments.append((ENV_OIDC_ENABLED, "false"))

    return assignments


def render_environment(assignments: Sequence[Assignment]) -> str:
    """Render assignments as NAME=value lines"""
    return "".join(f"{name}={value}\n" for name, value in assignments)
