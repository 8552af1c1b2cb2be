import io
from pathlib import Path

import httpx
from fastapi.testclient import TestClient

from bodbridge.spy import create_spy_app, format_value, parse_spy_port
from bodbridge.tools import replay


def test_spy_dumps_any_path_and_method():
    client = TestClient(create_spy_app())

    response = client.put(
        "/anything/here?x=1",
        json={"order": {"cart": [{"name": "Coffee"}]}},
        headers={"User-Agent": "bod/1.0"},
    )

    assert response.status_code == 200
    assert "PUT http://testserver/anything/here?x=1" in response.text
    assert "User agent: bod/1.0" in response.text
    assert 'Params: {"x": "1"}' in response.text
    assert "name: Coffee" in response.text


def test_format_value_outline():
    assert format_value({"a": 1, "bb": [2]}) == " a: 1\nbb:\n      0:  2"


def test_spy_port_falls_back_to_default():
    assert parse_spy_port([]) == 4567
    assert parse_spy_port(["x"]) == 4567
    assert parse_spy_port(["0"]) == 4567
    assert parse_spy_port(["8000"]) == 8000


def test_replay_posts_each_sample(tmp_path: Path):
    (tmp_path / "nested").mkdir()
    (tmp_path / "a.json").write_text('{"order": 1}\n', encoding="utf-8")
    (tmp_path / "nested" / "b.json").write_text('{"order": 2}', encoding="utf-8")
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append((str(request.url), request.content))
        return httpx.Response(200, text="OK")

    out = io.StringIO()
    failures = replay.replay(
        "dryrun",
        replay.find_samples(tmp_path),
        host="bridge",
        port=4567,
        client=httpx.Client(transport=httpx.MockTransport(handler)),
        out=out,
    )

    assert failures == 0
    assert seen == [
        ("http://bridge:4567/test/dispatch_dryrun", b'{"order": 1}'),
        ("http://bridge:4567/test/dispatch_dryrun", b'{"order": 2}'),
    ]
    assert "Testing dryrun on bridge:4567/test/dispatch_dryrun" in out.getvalue()


def test_replay_counts_error_responses(tmp_path: Path):
    (tmp_path / "a.json").write_text("{}", encoding="utf-8")
    client = httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(400, text="bad")))

    assert replay.replay("parse", replay.find_samples(tmp_path), client=client, out=io.StringIO()) == 1


def test_replay_rejects_unknown_mode(capsys):
    assert replay.main(["explode"]) == 1
    assert "Valid modes: parse, map, dryrun, dispatch" in capsys.readouterr().err


def test_replay_main_reads_samples_from_given_directory(tmp_path: Path, monkeypatch):
    (tmp_path / "a.json").write_text("{}", encoding="utf-8")
    calls = []

    def fake_replay(mode, samples, host, port):
        calls.append((mode, list(samples), host, port))
        return 0

    monkeypatch.setattr(replay, "replay", fake_replay)

    assert replay.main(["--samples", str(tmp_path), "map", "bridge", "8080"]) == 0
    assert calls == [("map", [tmp_path / "a.json"], "bridge", 8080)]


def test_replay_main_requires_samples_directory(capsys):
    assert replay.main(["parse", "--samples"]) == 1
    assert "--samples requires a directory" in capsys.readouterr().err
