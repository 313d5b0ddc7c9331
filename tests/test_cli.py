#!/usr/bin/env python3
"""
Test the command line entry point.
"""

import os
import subprocess
import sys
sys.path.append(os.path.join(os.path.dirname(__file__), '..', 'src'))

import pytest

from bftape.cli import main

SRC_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), '..', 'src')


def run_cli(*args, input_data=b""):
    env = dict(os.environ)
    env['PYTHONPATH'] = SRC_DIR + os.pathsep + env.get('PYTHONPATH', '')
    return subprocess.run(
        [sys.executable, '-m', 'bftape', *args],
        input=input_data,
        capture_output=True,
        env=env,
    )


def test_runs_program_file(tmp_path):
    path = tmp_path / "a.bf"
    path.write_text("+" * 65 + ".", encoding="utf-8")
    result = run_cli(str(path))
    assert result.returncode == 0
    assert result.stdout == b"A"


def test_echo_from_stdin(tmp_path):
    path = tmp_path / "cat.bf"
    path.write_text(",[.,]", encoding="utf-8")
    result = run_cli(str(path), input_data=b"hello")
    assert result.returncode == 0
    assert result.stdout == b"hello"


def test_program_from_stdin():
    result = run_cli('-', input_data=b"+++[->++++++++++++++++<]>+.")
    assert result.returncode == 0
    assert result.stdout == b"1"


def test_no_program_argument():
    result = run_cli()
    assert result.returncode == 2
    assert b"program" in result.stderr


def test_missing_file(tmp_path):
    result = run_cli(str(tmp_path / "missing.bf"))
    assert result.returncode == 1
    assert b"Couldn't read file" in result.stderr


def test_runtime_failure(tmp_path):
    path = tmp_path / "bad.bf"
    path.write_text("+.]", encoding="utf-8")
    result = run_cli(str(path))
    assert result.returncode == 1
    assert result.stdout == b"\x01"
    assert b"without matching [" in result.stderr


def test_dump_and_trace(tmp_path):
    path = tmp_path / "d.bf"
    path.write_text(">++", encoding="utf-8")
    result = run_cli('--dump', '--trace', str(path))
    assert result.returncode == 0
    assert b"ptr=1 steps=3" in result.stderr
    assert b"[  2]" in result.stderr


def test_main_without_arguments_exits():
    with pytest.raises(SystemExit) as exc:
        main([])
    assert exc.value.code == 2


def test_main_reports_load_error(tmp_path, capsys):
    assert main([str(tmp_path / "missing.bf")]) == 1
    assert "Couldn't read file" in capsys.readouterr().err


def test_verbose_logging(tmp_path):
    path = tmp_path / "v.bf"
    path.write_text("+", encoding="utf-8")
    result = run_cli('-v', str(path))
    assert result.returncode == 0
    assert b"INFO bftape.cli: Running" in result.stderr
    assert b"DEBUG" not in result.stderr

    result = run_cli('-vv', str(path))
    assert result.returncode == 0
    assert b"DEBUG bftape.loader: Loaded 1 symbols" in result.stderr
    assert b"DEBUG bftape.engine: Program finished after 1 steps" in result.stderr


def test_quiet_by_default(tmp_path):
    path = tmp_path / "q.bf"
    path.write_text("+", encoding="utf-8")
    result = run_cli(str(path))
    assert result.stderr == b""


def test_encoding_for_program_file(tmp_path):
    path = tmp_path / "latin.bf"
    path.write_bytes(b"caf\xe9 +++.")
    result = run_cli(str(path))
    assert result.returncode == 1
    assert b"Couldn't read file" in result.stderr

    result = run_cli('--encoding', 'latin-1', str(path))
    assert result.returncode == 0
    assert result.stdout == b"\x03"


def test_encoding_for_program_from_stdin():
    result = run_cli('-', input_data=b"caf\xe9 +++.")
    assert result.returncode == 1
    assert b"Couldn't read program" in result.stderr

    result = run_cli('--encoding', 'latin-1', '-', input_data=b"caf\xe9 +++.")
    assert result.returncode == 0
    assert result.stdout == b"\x03"


def test_program_from_stdin_then_input_is_empty():
    result = run_cli('-', input_data=b"+,.")
    assert result.returncode == 0
    assert result.stdout == b"\x00"
