"""Tests for the netcompose command line."""

from __future__ import annotations

import json
import logging

import pytest
import yaml

from netcompose.main import get_log_level, load_request, main

from .conftest import make_xnetwork


@pytest.fixture(autouse=True)
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path


def write_yaml(path, document) -> str:
    path.write_text(yaml.safe_dump(document), encoding="utf-8")
    return str(path)


def test_renders_bare_composite(workdir, capsys) -> None:
    xr = write_yaml(workdir / "xr.yaml", make_xnetwork(id="code", count=1, includeGateway=True))

    assert main([xr]) == 0

    (rsp,) = yaml.safe_load_all(capsys.readouterr().out)
    assert rsp["meta"] == {"ttl": "60s"}
    assert list(rsp["desired"]["resources"]) == ["vpc-code-0", "gateway-code-0"]


def test_renders_json_request(workdir, capsys) -> None:
    request = {
        "meta": {"tag": "t"},
        "observed": {"composite": {"resource": make_xnetwork(id="a", count=2)}},
    }
    path = workdir / "request.json"
    path.write_text(json.dumps(request), encoding="utf-8")

    assert main([str(path)]) == 0

    (rsp,) = yaml.safe_load_all(capsys.readouterr().out)
    assert rsp["meta"]["tag"] == "t"
    assert sorted(rsp["desired"]["resources"]) == ["vpc-a-0", "vpc-a-1"]


def test_fatal_response_sets_exit_code(workdir, capsys) -> None:
    ok = write_yaml(workdir / "ok.yaml", make_xnetwork(id="a", count=1))
    bad = write_yaml(workdir / "bad.yaml", {"observed": {}})

    assert main([ok, bad, "--progress"]) == 1

    first, second = yaml.safe_load_all(capsys.readouterr().out)
    assert "results" not in first
    assert second["results"][0]["severity"] == "SEVERITY_FATAL"


def test_unreadable_request(workdir, caplog) -> None:
    with caplog.at_level(logging.ERROR):
        assert main([str(workdir / "missing.yaml")]) == 1

    assert "cannot read" in caplog.text


def test_request_must_be_mapping(workdir, caplog) -> None:
    path = write_yaml(workdir / "list.yaml", ["a", "b"])

    with caplog.at_level(logging.ERROR):
        assert main([path]) == 1

    assert "request must be a mapping" in caplog.text


def test_output_file_and_overwrite(workdir) -> None:
    xr = write_yaml(workdir / "xr.yaml", make_xnetwork(id="a", count=1))
    out = workdir / "out" / "rsp.yaml"

    assert main([xr, "-o", str(out)]) == 0
    assert "vpc-a-0" in out.read_text(encoding="utf-8")

    assert main([xr, "-o", str(out)]) == 1
    assert main([xr, "-o", str(out), "--overwrite"]) == 0


def test_write_config(workdir) -> None:
    assert main(["-w", "-c", "netcompose.toml"]) == 0

    text = (workdir / "netcompose.toml").read_text(encoding="utf-8")
    assert 'region = "eu-central-1"' in text
    assert 'cidr_block = "192.168.0.0/16"' in text


def test_config_changes_defaults(workdir, capsys) -> None:
    (workdir / "config.toml").write_text(
        'region = "us-east-1"\nprovider_config_name = "prod"\n'
        'cidr_block = "192.168.0.0/16"\nttl = 60\n',
        encoding="utf-8",
    )
    xr = write_yaml(workdir / "xr.yaml", make_xnetwork(id="a", count=1))

    assert main([xr]) == 0

    (rsp,) = yaml.safe_load_all(capsys.readouterr().out)
    vpc = rsp["desired"]["resources"]["vpc-a-0"]["resource"]
    assert vpc["spec"]["forProvider"]["region"] == "us-east-1"
    assert vpc["spec"]["providerConfigRef"]["name"] == "prod"


def test_requires_request_files() -> None:
    with pytest.raises(SystemExit):
        main([])


def test_load_request_full_document(workdir) -> None:
    path = write_yaml(
        workdir / "req.yaml",
        {"observed": {"composite": {"resource": {"apiVersion": "v1", "kind": "X"}}}},
    )

    assert load_request(path).observed_composite() == {"apiVersion": "v1", "kind": "X"}


@pytest.mark.parametrize(
    ("name", "level", "unknown"),
    [
        ("debug", logging.DEBUG, False),
        ("WARN", logging.WARNING, False),
        ("chatty", logging.WARNING, True),
    ],
)
def test_get_log_level(name: str, level: int, unknown: bool) -> None:
    assert get_log_level(name) == (level, unknown)


def test_request_with_invalid_utf8(workdir, caplog) -> None:
    path = workdir / "binary.yaml"
    path.write_bytes(b"spec:\n  id: \xff\xfe\n")

    with caplog.at_level(logging.ERROR):
        assert main([str(path)]) == 1

    assert "cannot read" in caplog.text


def test_output_to_directory(workdir, caplog) -> None:
    xr = write_yaml(workdir / "xr.yaml", make_xnetwork(id="a", count=1))
    outdir = workdir / "outdir"
    outdir.mkdir()

    with caplog.at_level(logging.ERROR):
        assert main([xr, "-o", str(outdir), "--overwrite"]) == 1

    assert "cannot write" in caplog.text
