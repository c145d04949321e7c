"""Tests for the command line entry point and runtime settings."""

from __future__ import annotations

import json
import os

import pytest

from pwls.__main__ import main, parse_filters
from pwls.config import DEFAULT_SOURCE, Settings, load_env
from tests.pwls_fixture import write_json_catalog, write_workbooks


# ── Filters ────────────────────────────────────────────────────────

def test_parse_filters():
    assert parse_filters("curves", ["mnemonic=GR", "company_code=440"]) == {
        "mnemonic": "GR", "company_code": 440}
    assert parse_filters("properties", ["name=Gamma ray = total"]) == {"name": "Gamma ray = total"}
    assert parse_filters("tools", []) == {}


@pytest.mark.parametrize("entity,item", [
    ("curves", "mnemonic"),
    ("curves", "group=GR"),
    ("companies", "code=abc"),
])
def test_parse_filters_rejects(entity, item):
    with pytest.raises(ValueError):
        parse_filters(entity, [item])


# ── Commands ───────────────────────────────────────────────────────

def test_status(tmp_path, capsys):
    folder = write_json_catalog(tmp_path)
    assert main(["status", "--source", str(folder)]) == 1
    report = json.loads(capsys.readouterr().out)
    assert report["counts"]["tools"] == 3
    assert len(report["warnings"]) == 3


def test_query(tmp_path, capsys):
    folder = write_json_catalog(tmp_path)
    code = main(["query", "curves", "--source", str(folder),
                 "--filter", "mnemonic=GR", "--filter", "company_code=20"])
    assert code == 0
    (curve,) = json.loads(capsys.readouterr().out)
    assert curve["companyCode"] == 20


def test_query_bad_filter(tmp_path, capsys):
    folder = write_json_catalog(tmp_path)
    assert main(["query", "companies", "--source", str(folder), "--filter", "code=abc"]) == 2
    assert "error:" in capsys.readouterr().err


def test_convert(tmp_path, capsys):
    logs, props = write_workbooks(tmp_path / "xlsx")
    out = tmp_path / "json"
    code = main(["convert", "--source", str(logs), "--properties-workbook", str(props),
                 "--out", str(out)])
    assert code == 0
    assert (out / "curvesByTool.json").exists()
    companies = json.loads((out / "companies.json").read_text(encoding="utf-8"))
    assert [c["code"] for c in companies] == [10, 20, 440]


# ── Settings ───────────────────────────────────────────────────────

def test_settings_defaults():
    s = Settings.from_env({})
    assert s.source == DEFAULT_SOURCE
    assert s.port == 8081
    assert s.properties_workbook is None
    assert s.log_level == "INFO"


def test_settings_from_env():
    s = Settings.from_env({
        "PWLS_SOURCE": "./json",
        "PWLS_PROPERTIES_WORKBOOK": "props.xlsx",
        "PWLS_HTTP_TIMEOUT": "2.5",
        "PWLS_MAX_ANCESTRY": "8",
        "PWLS_PORT": "3000",
        "PWLS_LOG_LEVEL": "debug",
    })
    assert s.source == "./json"
    assert s.properties_workbook == "props.xlsx"
    assert s.http_timeout_s == 2.5
    assert s.max_ancestry_depth == 8
    assert s.port == 3000
    assert s.log_level == "DEBUG"


def test_load_env(tmp_path, monkeypatch):
    monkeypatch.setattr(os, "environ", {"PWLS_PORT": "9000"})
    (tmp_path / ".env").write_text(
        '# comment\nPWLS_SOURCE="./local"\nPWLS_PORT=1234\n', encoding="utf-8")

    load_env(tmp_path)
    s = Settings.from_env()
    assert s.source == "./local"
    assert s.port == 9000
