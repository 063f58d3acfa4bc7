"""
Persistent configuration: merging setup bundle settings into CLEO's TOML
configuration document.

Only the network.carl, network.oidc and network.tls groups are written.
Existing groups are reused as they are, so unrelated sections, sibling keys
and the table style chosen by the user survive a merge. Groups created here
follow CLEO's default layout::

    [network]
    carl.host = "carl"
    carl.port = 443

    [network.oidc]
    enabled = true

    [network.oidc.client]
    id = "cleo"
    secret = "..."
    scopes = "openid,profile"
    issuer.url = "https://auth.example.com/"

    [network.tls]
    ca = "/home/user/.config/opendut/tls/cleo-ca.pem"
    domain.name.override = "carl"
"""

from collections.abc import MutableMapping
from pathlib import PurePath
from typing import List, Union

import tomlkit
from tomlkit import TOMLDocument
from tomlkit.exceptions import TOMLKitError
from tomlkit.items import InlineTable, Table

from cleo_setup.setup.bundle import AuthEnabled, SetupBundle


class ConfigurationDocumentError(ValueError):
    """Raised when an existing configuration document cannot be parsed"""


def load_document(text: str) -> TOMLDocument:
    """
    Parse existing configuration text.

    Args:
        text: TOML content, may be empty

    Returns:
        TOMLDocument: Editable document preserving the original formatting

    Raises:
        ConfigurationDocumentError: If the text is not valid TOML
    """
    if not text or not text.strip():
        return tomlkit.document()
    try:
        return tomlkit.parse(text)
    except TOMLKitError as e:
        raise ConfigurationDocumentError(f"Existing configuration is not valid TOML: {e}") from e


def _new_group(parent: MutableMapping) -> MutableMapping:
    # Inline tables may only hold inline tables
    if isinstance(parent, InlineTable):
        return tomlkit.inline_table()
    return tomlkit.table(is_super_table=False)


def _ensure_table(parent: MutableMapping, name: str) -> MutableMapping:
    """Return the group `name` of `parent`, creating a table if absent"""
    existing = parent.get(name)
    if isinstance(existing, MutableMapping):
        return existing
    if name in parent:
        del parent[name]
    parent[name] = _new_group(parent)
    return parent[name]


def _is_super_table(group: MutableMapping) -> bool:
    return isinstance(group, Table) and group.is_super_table()


def _key_is_dotted(parent: MutableMapping, name: str) -> bool:
    body = parent.value.body if isinstance(parent, Table) else getattr(parent, "body", [])
    return any(
        key is not None and key.key == name and key.is_dotted()
        for key, _ in body
    )


def _set_dotted(
    parent: MutableMapping,
    path: List[str],
    value,
    parent_dotted: bool = False,
) -> None:
    """
    Set `value` at `path` below `parent`.

    Groups along the path that already exist are reused with their style;
    missing ones are written as a dotted key (e.g. issuer.url = ...).
    """
    head, *rest = path
    if not rest:
        parent[head] = value
        return

    existing = parent.get(head)
    if isinstance(existing, MutableMapping):
        _set_dotted(existing, rest, value, _key_is_dotted(parent, head))
        return

    if head in parent:
        del parent[head]

    if isinstance(parent, InlineTable) or (_is_super_table(parent) and not parent_dotted):
        # Inline tables get nested inline tables. An implicit parent such as
        # the one created by [network.tls] renders no header, so dotted keys
        # below it would lose their prefix.
        parent[head] = _new_group(parent)
        _set_dotted(parent[head], rest, value)
        return

    parent.add(tomlkit.key(path), value)


def merge(
    bundle: SetupBundle,
    certificate_path: Union[str, PurePath],
    document: TOMLDocument,
) -> TOMLDocument:
    """
    Merge the settings derived from a setup bundle into a document.

    Args:
        bundle: Decoded setup bundle
        certificate_path: Location of the persisted CA certificate
        document: Document to update in place

    Returns:
        TOMLDocument: The updated document

    Raises:
        MissingHostError: If the CARL URL has no host
        ConfigurationDocumentError: If the document structure cannot take
            the settings
    """
    carl_host = bundle.carl_host
    try:
        _merge_groups(bundle, carl_host, str(certificate_path), document)
    except (TOMLKitError, ValueError) as e:
        raise ConfigurationDocumentError(
            f"Existing configuration cannot be updated: {e}"
        ) from e
    return document


def _merge_groups(
    bundle: SetupBundle,
    carl_host: str,
    certificate_path: str,
    document: TOMLDocument,
) -> None:
    carl_port = bundle.carl_port

    network = _ensure_table(document, "network")
    _set_dotted(network, ["carl", "host"], carl_host)
    _set_dotted(network, ["carl", "port"], carl_port)

    auth_config = bundle.auth_config
    if isinstance(auth_config, AuthEnabled):
        oidc = _ensure_table(network, "oidc")
        tls = _ensure_table(network, "tls")

        oidc["enabled"] = True
        tls["ca"] = certificate_path
        _set_dotted(tls, ["domain", "name", "override"], carl_host)

        client = _ensure_table(oidc, "client")
        client["id"] = auth_config.client_id
        client["secret"] = auth_config.client_secret
        client["scopes"] = auth_config.joined_scopes
        _set_dotted(client, ["issuer", "url"], auth_config.issuer_url)
    else:
        oidc = _ensure_table(network, "oidc")
        oidc["enabled"] = False


def prepare_configuration(
    bundle: SetupBundle,
    certificate_path: Union[str, PurePath],
    existing_text: str = "",
) -> str:
    """Merge a setup bundle into existing configuration text and render it"""
    document = merge(bundle, certificate_path, load_document(existing_text))
    return tomlkit.dumps(document)
