from pathlib import Path

import pytest

from bodbridge import cli
from bodbridge.config import Settings, load_api_credentials
from bodbridge.errors import CredentialsError


@pytest.mark.parametrize("argv", [["1", "2"], ["abc"], ["0"], ["65536"], ["-5"]])
def test_bad_port_arguments_exit_with_usage(argv, capsys):
    assert cli.main(argv, config=Settings()) == 1

    captured = capsys.readouterr()
    assert "Usage: bodbridge [http_port_num]" in captured.out
    assert captured.err.strip()


def test_parse_port_default_and_explicit():
    assert cli.parse_port([], 4567) == 4567
    assert cli.parse_port(["8080"], 4567) == 8080
    assert cli.parse_port(["65535"], 4567) == 65535


def test_missing_credentials_exit_before_serving(tmp_path: Path, monkeypatch, capsys):
    served = []
    monkeypatch.setattr(cli.uvicorn, "run", lambda *args, **kwargs: served.append(kwargs))

    status = cli.main([], config=Settings(credentials_file=tmp_path / "absent"))

    assert status == 1
    assert served == []
    captured = capsys.readouterr()
    assert "API credentials file not found" in captured.err
    assert "sitename, username and password" in captured.out


def test_serves_on_requested_port(tmp_path: Path, monkeypatch):
    credentials = tmp_path / "kai_bod_api_credentials"
    credentials.write_text("rivervalley\nbodapi\nSecret123\n", encoding="utf-8")
    served = []
    monkeypatch.setattr(cli.uvicorn, "run", lambda app, **kwargs: served.append((app, kwargs)))

    status = cli.main(["1234"], config=Settings(credentials_file=credentials, bind_host="127.0.0.1"))

    assert status == 0
    app, kwargs = served[0]
    assert kwargs["port"] == 1234
    assert kwargs["host"] == "127.0.0.1"
    assert app.state.services.client.base_url == "https://rivervalley.kailabor.com/api/v3/"


def test_load_api_credentials(tmp_path: Path):
    path = tmp_path / "creds"
    path.write_text("rivervalleycasino\nbodapiuser\nSecretPassword123", encoding="utf-8")

    credentials = load_api_credentials(path)

    assert (credentials.sitename, credentials.username, credentials.password) == (
        "rivervalleycasino",
        "bodapiuser",
        "SecretPassword123",
    )


@pytest.mark.parametrize(("content", "missing"), [("", "sitename"), ("site\n", "username"), ("site\nuser\n\n", "password")])
def test_incomplete_credentials(tmp_path: Path, content, missing):
    path = tmp_path / "creds"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(CredentialsError, match=f"Must supply {missing}"):
        load_api_credentials(path)


def test_zonefile_settings_read_legacy_environment(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("ZONEFILE_EXPIRATION_TIME", "120")
    monkeypatch.setenv("ZONEFILE_SCRIPT", str(tmp_path / "refresh_zones"))

    settings = Settings()

    assert settings.zonefile_expiration_time == 120.0
    assert settings.zonefile_script == (tmp_path / "refresh_zones").resolve()
