import os
import platform
import tempfile
from enum import Enum
from pathlib import Path

from cleo_setup.constants import CONFIG_FILE_NAME, SETTINGS_DIR_NAME, SYSTEM_SETTINGS_DIR


class SetupType(str, Enum):
    """Where persisted settings are stored"""
    SYSTEM = "System"
    USER = "User"


def config_directory(scope: SetupType) -> Path:
    """Get platform-specific opendut settings directory for a scope"""
    system = platform.system()
    if scope == SetupType.SYSTEM:
        if system == "Windows":
            return Path(os.environ.get("PROGRAMDATA", "C:\\ProgramData")) / SETTINGS_DIR_NAME
        return Path(SYSTEM_SETTINGS_DIR)

    if system == "Windows":
        base_dir = os.environ.get("APPDATA", "")
        return Path(base_dir) / SETTINGS_DIR_NAME
    elif system == "Darwin":  # macOS
        return Path.home() / "Library" / "Application Support" / SETTINGS_DIR_NAME
    else:  # Linux and others
        xdg_config = os.environ.get("XDG_CONFIG_HOME", "")
        if xdg_config:
            return Path(xdg_config) / SETTINGS_DIR_NAME
        return Path.home() / ".config" / SETTINGS_DIR_NAME


def certificate_path(name: str, scope: SetupType) -> Path:
    """Location of the CA certificate for a component"""
    return config_directory(scope) / "tls" / f"{name}-ca.pem"


def config_path(name: str, scope: SetupType) -> Path:
    """Location of the configuration file for a component"""
    if scope == SetupType.SYSTEM:
        return config_directory(scope) / f"{name}.toml"
    return config_directory(scope) / name / CONFIG_FILE_NAME


def _atomic_write(path: Path, content: bytes, mode: int) -> None:
    """Write content next to path and move it into place"""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(content)
        os.chmod(tmp_name, mode)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def write_certificate(name: str, pem: bytes, scope: SetupType) -> Path:
    """
    Store a CA certificate and return its path.

    Writing the same certificate again leaves the file untouched.
    """
    path = certificate_path(name, scope)
    if path.exists() and path.read_bytes() == pem:
        return path
    _atomic_write(path, pem, 0o644)
    return path


def read_config(name: str, scope: SetupType) -> str:
    """Existing configuration text, empty if there is none"""
    path = config_path(name, scope)
    if not path.exists():
        return ""
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def write_config(name: str, content: str, scope: SetupType) -> Path:
    """Persist configuration text; readable by the owner only"""
    path = config_path(name, scope)
    _atomic_write(path, content.encode("utf-8"), 0o600)
    return path
