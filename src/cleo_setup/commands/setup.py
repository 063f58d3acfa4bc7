"""
CLEO setup command.

Turns a setup string issued by CARL into either environment variables for
the current shell or a persisted CLEO configuration plus CA certificate.
"""

from pathlib import Path
from typing import Optional, Tuple

import tomlkit
import typer

from cleo_setup.commands.shared.cli_options import optional_value_command
from cleo_setup.constants import COMPONENT_NAME
from cleo_setup.logging import get_logger, log_application_event
from cleo_setup.setup import (
    AuthEnabled,
    ConfigurationDocumentError,
    SetupBundle,
    decode,
    load_document,
    merge,
    render_environment,
    to_environment_assignments,
)
from cleo_setup.utils.console import error, info, success
from cleo_setup.utils.settings_store import (
    SetupType,
    certificate_path,
    read_config,
    write_certificate,
    write_config,
)

PERSISTENT_OPTION_NAMES = ("--persistent", "-p")

SetupCommand = optional_value_command(
    PERSISTENT_OPTION_NAMES,
    default=SetupType.USER.value,
    choices=[setup_type.value for setup_type in SetupType],
)


def persist_configuration(bundle: SetupBundle, scope: SetupType) -> Tuple[Path, Path]:
    """
    Store the CA certificate and merge the bundle into CLEO's configuration.

    The certificate is stored at the requested scope; the configuration is
    always written for the current user. The merge is done in memory
    first, so nothing is written when the existing configuration cannot be
    updated.

    Returns:
        Tuple of (certificate path, configuration path)

    Raises:
        ConfigurationDocumentError: If the existing configuration is invalid
        OSError: If a file cannot be read or written
    """
    logger = get_logger("cleo_setup.commands.setup")
    document = load_document(read_config(COMPONENT_NAME, SetupType.USER))
    ca_path = certificate_path(COMPONENT_NAME, scope)
    content = tomlkit.dumps(merge(bundle, ca_path, document))

    write_certificate(COMPONENT_NAME, bundle.ca.as_bytes(), scope)
    logger.info(f"CA certificate stored at {ca_path}")

    config_path = write_config(COMPONENT_NAME, content, SetupType.USER)
    logger.info(f"Configuration written to {config_path}")

    return ca_path, config_path


def setup_cleo(
    setup_string: str = typer.Argument(..., help="CLEO setup string"),
    persistent: Optional[SetupType] = typer.Option(
        None,
        *PERSISTENT_OPTION_NAMES,
        case_sensitive=False,
        help="Persist CLEO setup to file (System or User, default: User)",
    ),
):
    """CLEO setup for authenticating against CARL"""
    logger = get_logger("cleo_setup.commands.setup")

    try:
        bundle = decode(setup_string)
        carl_host = bundle.carl_host
    except ValueError as e:
        logger.error(f"Rejected setup string: {e}")
        error(f"Invalid setup string: {e}")
        raise typer.Exit(1)

    log_application_event(
        "Setup string decoded",
        details={
            "cleo_id": str(bundle.id),
            "carl_host": carl_host,
            "carl_port": bundle.carl_port,
            "oidc_enabled": isinstance(bundle.auth_config, AuthEnabled),
            "persistent": persistent.value if persistent else None,
        },
    )

    if persistent is None:
        typer.echo(render_environment(to_environment_assignments(bundle)), nl=False)
        return

    try:
        ca_path, config_path = persist_configuration(bundle, persistent)
    except ConfigurationDocumentError as e:
        logger.error(str(e))
        error(f"{e}. Fix or remove the file and run setup again.")
        raise typer.Exit(1)
    except OSError as e:
        logger.error(f"Failed to persist CLEO setup: {e}")
        error(f"Failed to persist CLEO setup: {e}")
        raise typer.Exit(1)

    success(f"CLEO configuration written to {config_path}")
    info(f"CA certificate stored at {ca_path}")
