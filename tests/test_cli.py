"""Tests for the command-line front end."""

import json

import pytest

from ada_babel.cli import build_parser, main


@pytest.fixture
def env(monkeypatch, tmp_path):
    monkeypatch.setenv("ADA_BABEL_TMPDIR", str(tmp_path / "artifacts"))
    monkeypatch.delenv("ADA_BABEL_COMPILE_CMD", raising=False)
    monkeypatch.delenv("ADA_BABEL_PROVE_CMD", raising=False)
    monkeypatch.delenv("ADA_BABEL_VERSION", raising=False)
    return tmp_path


def test_parser_defaults():
    args = build_parser().parse_args(["eval", "x.adb"])
    assert args.level == 4
    assert args.mode == "all"
    assert args.language_version == 0
    assert args.with_units == []


def test_eval_prints_program_output(env, fake_run, capsys):
    body = env / "hello.adb"
    body.write_text("null;")
    fake_run.push(0, "", "")
    fake_run.push(0, "Hello", "")

    code = main(["eval", str(body), "--unit", "hello", "--version", "2005"])

    assert code == 0
    assert capsys.readouterr().out == "Hello\n"
    assert "-gnat2005" in fake_run.argvs[0]


def test_eval_failure_exit_code(env, fake_run, capsys):
    body = env / "bad.adb"
    body.write_text("oops")
    fake_run.push(4, "", "bad.adb:1:01: error\n")

    assert main(["eval", str(body)]) == 1
    assert "error" in capsys.readouterr().out


def test_eval_prove_flags(env, fake_run):
    body = env / "p.adb"
    body.write_text("null;")
    fake_run.push(0, "", "")

    main(["eval", str(body), "--prove", "--mode", "flow", "--assumptions"])

    argv = fake_run.argvs[0]
    assert argv[0] == "gnatprove"
    assert "--mode=flow" in argv
    assert "--assumptions" in argv


def test_unknown_template_reports_error(env, fake_run, capsys):
    body = env / "t.adb"
    body.write_text("null;")

    assert main(["eval", str(body), "--template", "nope"]) == 1
    assert "nope" in capsys.readouterr().err
    assert fake_run.calls == []


def test_missing_body_file(env, capsys):
    assert main(["eval", str(env / "absent.adb")]) == 1
    assert "cannot read" in capsys.readouterr().err


def test_tangle_writes_banner(env):
    body = env / "snippet.adb"
    body.write_text('Put_Line ("Hi");')
    target = env / "src" / "hello.adb"

    code = main([
        "tangle", str(body), str(target),
        "--document", "notes.org", "--template", "main", "--with", "Ada.Text_IO",
    ])

    assert code == 0
    text = target.read_text()
    assert "notes.org" in text
    assert "DO NOT EDIT" in text
    assert "procedure hello is" in text


def test_space_separated_with_value(env, fake_run):
    body = env / "io.adb"
    body.write_text("null;")
    fake_run.push(0, "", "")
    fake_run.push(0, "", "")

    main([
        "eval", str(body), "--unit", "io", "--template", "main",
        "--with", "Ada.Text_IO Ada.Integer_Text_IO",
    ])

    text = (env / "artifacts" / "io.adb").read_text()
    assert "with Ada.Text_IO; use Ada.Text_IO;" in text
    assert "with Ada.Integer_Text_IO; use Ada.Integer_Text_IO;" in text


def test_eval_json_output(env, fake_run, capsys):
    body = env / "hello.adb"
    body.write_text("null;")
    fake_run.push(0, "", "")
    fake_run.push(0, "Hello\n", "")

    code = main(["eval", str(body), "--unit", "hello", "--json"])

    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["stage"] == "run"
    assert payload["status"] == "ok"
    assert payload["exit_code"] == 0
    assert payload["output"] == "Hello\n"
