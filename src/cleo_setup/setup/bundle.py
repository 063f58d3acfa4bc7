"""
Setup bundle model and setup string decoding.

A setup string is issued by CARL and copy-pasted by the user. It decodes to
a SetupBundle carrying everything CLEO needs to reach CARL: the CARL URL,
the CA certificate to trust and the OIDC client configuration.

Wire format: a JSON document, zlib-compressed and encoded as URL-safe
base64 (padding optional). The JSON shape is::

    {
        "id": "<uuid>",
        "carl": "https://carl.example.com:443/",
        "ca": "-----BEGIN CERTIFICATE-----\\n...",
        "auth_config": "Disabled"
                       | {"Enabled": {"issuer_url": "...", "client_id": "...",
                                      "client_secret": "...", "scopes": [...]}}
    }
"""

import base64
import binascii
import json
import re
import uuid
import zlib
from dataclasses import dataclass, field
from typing import Any, Dict, Tuple, Union

from cleo_setup.constants import DEFAULT_CARL_PORT
from cleo_setup.utils.url import normalize_url, parse_url, url_host, url_port


class SetupStringDecodeError(ValueError):
    """Raised when a setup string cannot be decoded into a SetupBundle"""


class MissingHostError(ValueError):
    """Raised when the CARL URL carries no host name"""


_PEM_BLOCK = re.compile(
    r"-----BEGIN ([A-Z0-9 ]+)-----(.*?)-----END \1-----", re.DOTALL
)


@dataclass(frozen=True)
class Certificate:
    """CA certificate in PEM form. Only the PEM framing is checked."""

    pem: str

    @classmethod
    def from_pem(cls, text: str) -> "Certificate":
        """
        Build a certificate from PEM text.

        Raises:
            ValueError: If the text holds no well-formed PEM block
        """
        if not isinstance(text, str) or not text.strip():
            raise ValueError("certificate is empty")

        blocks = _PEM_BLOCK.findall(text)
        if not blocks:
            raise ValueError("certificate is not PEM encoded")

        for label, body in blocks:
            content = "".join(body.split())
            if not content:
                raise ValueError(f"PEM block '{label}' has no content")
            try:
                base64.b64decode(content, validate=True)
            except binascii.Error as e:
                raise ValueError(f"PEM block '{label}' is not valid base64") from e

        return cls(pem=text.strip() + "\n")

    def encode_as_string(self) -> str:
        return self.pem

    def as_bytes(self) -> bytes:
        return self.pem.encode("utf-8")


@dataclass(frozen=True)
class AuthDisabled:
    """CARL accepts CLEO without OIDC authentication"""


@dataclass(frozen=True)
class AuthEnabled:
    """OIDC client credentials CLEO uses to authenticate against CARL"""

    issuer_url: str
    client_id: str
    client_secret: str = field(repr=False)
    scopes: Tuple[str, ...] = ()

    @property
    def joined_scopes(self) -> str:
        return ",".join(self.scopes)


AuthConfig = Union[AuthDisabled, AuthEnabled]


def require_host(url: str) -> str:
    """
    Return the host of the CARL URL.

    Raises:
        MissingHostError: If the URL has no host component
    """
    host = url_host(url)
    if not host:
        raise MissingHostError(f"Host name should be defined in CARL URL '{url}'")
    return host


@dataclass(frozen=True)
class SetupBundle:
    """Decoded content of a CLEO setup string"""

    carl: str
    ca: Certificate
    auth_config: AuthConfig
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    @property
    def carl_host(self) -> str:
        return require_host(self.carl)

    @property
    def carl_port(self) -> int:
        return url_port(self.carl, DEFAULT_CARL_PORT)


def decode(setup_string: str) -> SetupBundle:
    """
    Decode a setup string into a SetupBundle.

    Args:
        setup_string: Encoded setup string as issued by CARL

    Returns:
        SetupBundle: The fully populated bundle

    Raises:
        SetupStringDecodeError: If the string is malformed, truncated or
            carries invalid fields
    """
    if not isinstance(setup_string, str) or not setup_string.strip():
        raise SetupStringDecodeError("Setup string is empty")

    compact = "".join(setup_string.split())
    padded = compact + "=" * (-len(compact) % 4)
    try:
        compressed = base64.b64decode(padded.encode("ascii"), altchars=b"-_", validate=True)
    except ValueError as e:
        raise SetupStringDecodeError(f"Setup string is not valid base64: {e}") from e

    try:
        raw = zlib.decompress(compressed)
    except zlib.error as e:
        raise SetupStringDecodeError(
            f"Setup string is truncated or corrupted: {e}"
        ) from e

    try:
        payload = json.loads(raw.decode("utf-8"))
    except ValueError as e:
        raise SetupStringDecodeError(f"Setup string payload is not valid JSON: {e}") from e

    if not isinstance(payload, dict):
        raise SetupStringDecodeError("Setup string payload must be a JSON object")

    return _bundle_from_payload(payload)


def encode(bundle: SetupBundle) -> str:
    """Encode a SetupBundle into a setup string, the inverse of decode()"""
    payload = {
        "id": str(bundle.id),
        "carl": bundle.carl,
        "ca": bundle.ca.encode_as_string(),
        "auth_config": _auth_config_to_payload(bundle.auth_config),
    }
    raw = json.dumps(payload, separators=(",", ":")).encode("utf-8")
    encoded = base64.urlsafe_b64encode(zlib.compress(raw))
    return encoded.decode("ascii").rstrip("=")


def _bundle_from_payload(payload: Dict[str, Any]) -> SetupBundle:
    raw_id = _require(payload, "id", str)
    try:
        cleo_id = uuid.UUID(raw_id)
    except ValueError as e:
        raise SetupStringDecodeError(f"Field 'id' is not a valid UUID: {raw_id!r}") from e

    raw_carl = _require(payload, "carl", str)
    try:
        carl = normalize_url(raw_carl)
    except ValueError as e:
        raise SetupStringDecodeError(f"Field 'carl' is not a valid URL: {e}") from e

    raw_ca = _require(payload, "ca", str)
    try:
        ca = Certificate.from_pem(raw_ca)
    except ValueError as e:
        raise SetupStringDecodeError(f"Field 'ca' is not a valid certificate: {e}") from e

    if "auth_config" not in payload:
        raise SetupStringDecodeError("Setup string is missing field 'auth_config'")
    auth_config = _auth_config_from_payload(payload["auth_config"])

    return SetupBundle(carl=carl, ca=ca, auth_config=auth_config, id=cleo_id)


def _auth_config_from_payload(value: Any) -> AuthConfig:
    if value == "Disabled":
        return AuthDisabled()

    if not isinstance(value, dict) or list(value) != ["Enabled"]:
        raise SetupStringDecodeError(
            "Field 'auth_config' must be \"Disabled\" or {\"Enabled\": {...}}"
        )

    enabled = value["Enabled"]
    if not isinstance(enabled, dict):
        raise SetupStringDecodeError("Field 'auth_config.Enabled' must be an object")

    raw_issuer = _require(enabled, "issuer_url", str, prefix="auth_config.Enabled.")
    try:
        if not parse_url(raw_issuer).hostname:
            raise ValueError(f"URL '{raw_issuer}' has no host")
        issuer_url = normalize_url(raw_issuer)
    except ValueError as e:
        raise SetupStringDecodeError(
            f"Field 'auth_config.Enabled.issuer_url' is not a valid URL: {e}"
        ) from e

    scopes = enabled.get("scopes", [])
    if not isinstance(scopes, list) or not all(isinstance(s, str) for s in scopes):
        raise SetupStringDecodeError(
            "Field 'auth_config.Enabled.scopes' must be a list of strings"
        )

    return AuthEnabled(
        issuer_url=issuer_url,
        client_id=_require(enabled, "client_id", str, prefix="auth_config.Enabled."),
        client_secret=_require(enabled, "client_secret", str, prefix="auth_config.Enabled."),
        scopes=tuple(scopes),
    )


def _auth_config_to_payload(auth_config: AuthConfig) -> Any:
    if isinstance(auth_config, AuthEnabled):
        return {
            "Enabled": {
                "issuer_url": auth_config.issuer_url,
                "client_id": auth_config.client_id,
                "client_secret": auth_config.client_secret,
                "scopes": list(auth_config.scopes),
            }
        }
    return "Disabled"


def _require(payload: Dict[str, Any], key: str, expected: type, prefix: str = "") -> Any:
    if key not in payload:
        raise SetupStringDecodeError(f"Setup string is missing field '{prefix}{key}'")
    value = payload[key]
    if not isinstance(value, expected):
        raise SetupStringDecodeError(
            f"Field '{prefix}{key}' must be of type {expected.__name__}"
        )
    return value
