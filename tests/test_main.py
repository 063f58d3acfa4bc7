import pytest

import cleo_setup.main as cli_main


def test_main_runs_app(mocker):
    app = mocker.patch("cleo_setup.main.app")

    cli_main.main()

    app.assert_called_once_with()


def test_main_reraises_errors(mocker):
    mocker.patch("cleo_setup.main.app", side_effect=RuntimeError("boom"))

    with pytest.raises(RuntimeError, match="boom"):
        cli_main.main()
