import logging

import pytest

from firstfollow import cli


def test_default_grammar(capsys):
    assert cli.main([]) == 0

    out = capsys.readouterr().out
    assert out.startswith("FIRST sets:\nS: { a, b, c }")
    assert "FOLLOW sets:" in out
    assert "C: { d }" in out


def test_first_only(capsys):
    assert cli.main(["expression", "--first-only"]) == 0

    out = capsys.readouterr().out
    assert "E': { +, epsilon }" in out
    assert "FOLLOW" not in out


def test_table(capsys):
    assert cli.main(["expression", "--table"]) == 0

    out = capsys.readouterr().out
    assert "FIRST" in out
    assert "FOLLOW" in out
    assert "{ ), +, $ }" in out


def test_start_symbol(capsys):
    assert cli.main(["sequence", "--start", "C"]) == 0

    assert "C: { d, $ }" in capsys.readouterr().out


def test_unknown_start_symbol(capsys, caplog):
    caplog.set_level(logging.ERROR)

    assert cli.main(["sequence", "--start", "Q"]) == 1
    assert "Start symbol 'Q'" in caplog.text
    assert capsys.readouterr().out == ""


def test_unknown_grammar():
    with pytest.raises(SystemExit) as e:
        cli.main(["nope"])
    assert e.value.code == 2


def test_graph(monkeypatch, capsys):
    drawn = []
    monkeypatch.setattr(cli, "visualize", drawn.append)

    assert cli.main(["expression", "--graph"]) == 0
    assert [g.goal for g in drawn] == ["E"]


def test_start_needs_follow(capsys):
    with pytest.raises(SystemExit) as e:
        cli.main(["sequence", "--first-only", "--start", "C"])
    assert e.value.code == 2
    assert "cannot be used with --first-only" in capsys.readouterr().err
