import os
from datetime import datetime, timedelta

from cleo_setup.logging.utils import (
    sanitize_data,
    sanitize_dict,
    sanitize_list,
    sanitize_string,
    cleanup_old_logs,
)


def test_sanitize_dict_masks_sensitive_key():
    data = {"client_secret": "supersecret", "client_id": "cleo"}
    result = sanitize_dict(data, ("secret",))

    assert result["client_secret"] == "supe...cret"
    assert result["client_id"] == "cleo"


def test_sanitize_dict_masks_short_values():
    result = sanitize_dict({"setup_string": "abc"}, ("setup_string",))

    assert result["setup_string"] == "***"


def test_sanitize_list_masks_nested_data():
    data = [{"secret": "secret"}, {"x": 1}]
    result = sanitize_list(data, ("secret",))

    assert result[0]["secret"] == "***"
    assert result[1]["x"] == 1


def test_sanitize_data_handles_string_patterns():
    text = "Bearer abcdefghijklmnop"
    result = sanitize_data(text, ("token",))

    assert result == "Bearer ***"


def test_sanitize_data_leaves_other_types():
    assert sanitize_data(443, ("secret",)) == 443


def test_sanitize_string_environment_secret():
    text = "OPENDUT_CLEO_NETWORK_OIDC_CLIENT_SECRET=918642e0\nOPENDUT_CLEO_NETWORK_OIDC_CLIENT_ID=cleo"
    result = sanitize_string(text)

    assert "918642e0" not in result
    assert "OPENDUT_CLEO_NETWORK_OIDC_CLIENT_ID=cleo" in result


def test_sanitize_string_toml_secret():
    result = sanitize_string('secret = "918642e0"\nid = "cleo"')

    assert result == 'secret = "***"\nid = "cleo"'


def test_cleanup_old_logs_removes_old_files(tmp_path):
    log_dir = tmp_path / "logs"
    log_dir.mkdir()

    old_file = log_dir / "cleo.log.2026-01-01"
    new_file = log_dir / "cleo.log.2026-01-30"
    other_file = log_dir / "notes.txt"

    for path in (old_file, new_file, other_file):
        path.write_text("log")

    old_time = (datetime.now() - timedelta(days=40)).timestamp()
    new_time = (datetime.now() - timedelta(days=1)).timestamp()

    os.utime(old_file, (old_time, old_time))
    os.utime(other_file, (old_time, old_time))
    os.utime(new_file, (new_time, new_time))

    removed = cleanup_old_logs(log_dir, retention_days=7)

    assert removed == 1
    assert not old_file.exists()
    assert new_file.exists()
    assert other_file.exists()


def test_cleanup_old_logs_no_dir(tmp_path):
    removed = cleanup_old_logs(tmp_path / "missing", retention_days=7)
    assert removed == 0


def test_cleanup_old_logs_uses_log_filename(tmp_path):
    old_time = (datetime.now() - timedelta(days=40)).timestamp()
    default_rotated = tmp_path / "cleo.log.2026-01-01"
    custom_rotated = tmp_path / "custom.log.2026-01-01"

    for path in (default_rotated, custom_rotated):
        path.write_text("log")
        os.utime(path, (old_time, old_time))

    removed = cleanup_old_logs(tmp_path, retention_days=7, log_filename="custom.log")

    assert removed == 1
    assert not custom_rotated.exists()
    assert default_rotated.exists()
