"""Tests for CLI output helpers."""

import json
from datetime import date

import yaml

from simplenosql.cli._output import print_error, print_json, print_table, print_yaml


def test_print_table_json(capsys):
    print_table(["bucket", "entities"], [["a", 1], ["b", 2]], json_mode=True)
    out = capsys.readouterr().out
    data = json.loads(out)
    assert len(data) == 2
    assert data[0] == {"bucket": "a", "entities": 1}


def test_print_table_text(capsys):
    print_table(["bucket", "entities"], [["albums", 2]], json_mode=False)
    out = capsys.readouterr().out
    assert "bucket" in out
    assert "albums" in out


def test_print_table_empty(capsys):
    print_table(["bucket"], [], json_mode=False)
    out = capsys.readouterr().out
    assert out == ""


def test_print_json(capsys):
    print_json([{"bucket": "albums", "id": "a1", "data": {"n": 1}}])
    out = capsys.readouterr().out
    assert json.loads(out) == [{"bucket": "albums", "id": "a1", "data": {"n": 1}}]


def test_print_json_stringifies_unknown_values(capsys):
    print_json({"released": date(2000, 10, 2)})
    out = capsys.readouterr().out
    assert json.loads(out) == {"released": "2000-10-02"}


def test_print_table_aligns_columns(capsys):
    print_table(["bucket", "entities"], [["albums", 2], ["a", 10]])
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "bucket  entities"
    assert lines[1] == "------  --------"
    assert lines[2] == "albums  2"
    assert lines[3] == "a       10"


def test_print_yaml(capsys):
    print_yaml([{"id": "a1", "data": {"n": 1}}])
    out = capsys.readouterr().out
    assert yaml.safe_load(out) == [{"id": "a1", "data": {"n": 1}}]


def test_print_error(capsys):
    print_error("something broke")
    err = capsys.readouterr().err
    assert "Error: something broke" in err
