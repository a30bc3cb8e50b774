"""Tests for job file loading and validation."""

import tempfile
from pathlib import Path

import pytest

from cmdexpand.exceptions import JobValidationError
from cmdexpand.loader import JobLoader


def write_job(tmpdir: str, content: str) -> Path:
    path = Path(tmpdir) / "job.yaml"
    path.write_text(content)
    return path


def test_loads_string_command_with_list_env():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = write_job(tmpdir, """
version: "1"
command: cov-build --dir "$IDIR" make
env:
  - IDIR=/tmp/idir
  - malformed
timeout_sec: 30
cwd: build
""")
        job = JobLoader().load(path)

        assert job.command == 'cov-build --dir "$IDIR" make'
        assert job.env == ['IDIR=/tmp/idir', 'malformed']
        assert job.advanced_parser is True
        assert job.inherit_env is True
        assert job.timeout_sec == 30
        assert job.cwd == Path(tmpdir).resolve() / 'build'
        assert job.path == path


def test_mapping_env_is_stringified():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = write_job(tmpdir, """
version: 1
command: [echo, $FLAG, $N, $E]
env:
  FLAG: true
  N: 3
  E:
advanced_parser: false
inherit_env: false
""")
        job = JobLoader().load(path)

        assert job.command == ['echo', '$FLAG', '$N', '$E']
        assert job.env == ['FLAG=true', 'N=3', 'E=']
        assert job.advanced_parser is False
        assert job.inherit_env is False


def test_collects_all_errors():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = write_job(tmpdir, """
version: "9"
command: [echo, 1]
env: 42
timeout_sec: -5
advanced_parser: "yes please"
extra: true
""")
        with pytest.raises(JobValidationError) as exc_info:
            JobLoader().load(path)

        messages = [error.message for error in exc_info.value.errors]
        assert any("Unknown field 'extra'" in m for m in messages)
        assert any("Unsupported version" in m for m in messages)
        assert any("Command tokens must be strings" in m for m in messages)
        assert any("'env' must be a list or mapping" in m for m in messages)
        assert any("timeout_sec" in m for m in messages)
        assert any("advanced_parser" in m for m in messages)
        assert exc_info.value.exit_code == 2


def test_missing_command_and_version():
    with pytest.raises(JobValidationError) as exc_info:
        JobLoader().load_dict({'env': []})

    messages = [error.message for error in exc_info.value.errors]
    assert "'version' field is required" in messages
    assert "'command' field is required" in messages


def test_non_mapping_document():
    with pytest.raises(JobValidationError) as exc_info:
        JobLoader().load_dict(["not", "a", "mapping"])
    assert "must be a YAML object" in str(exc_info.value)


def test_invalid_yaml():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = write_job(tmpdir, "command: [unclosed\n")
        with pytest.raises(JobValidationError) as exc_info:
            JobLoader().load(path)
        assert "Failed to load job file" in str(exc_info.value)


def test_non_string_keys_are_validation_errors():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = write_job(tmpdir, """
version: "1"
command: echo
1: x
foo: y
""")
        with pytest.raises(JobValidationError) as exc_info:
            JobLoader().load(path)

        messages = [error.message for error in exc_info.value.errors]
        assert "Field names must be strings, got 1" in messages
        assert "Unknown field 'foo'" in messages
