import logging

import pytest
from click.testing import Result
from typer.testing import CliRunner

from version_store.cli import (
    EXIT_CODE_INIT_ERROR,
    EXIT_CODE_PERSIST_ERROR,
    app,
)
from version_store.conftest import read_props

logger = logging.getLogger(__name__)
runner = CliRunner()


@pytest.fixture(autouse=True)
def info_logs(caplog):
    caplog.set_level(logging.INFO)
    return caplog


def run(command: str, exit_code: int = 0) -> Result:
    result = runner.invoke(app, command.split())
    logger.info(f"cli command output={result.output}")
    if exit_code == 0 and (e := result.exception):
        logger.exception(e)
        raise e
    assert result.exit_code == exit_code, "exit code is not as expected"
    return result


def test_normal_help_command_is_ok():
    run("--help")


def test_no_command_shows_help():
    result = run("")
    assert "bump-major" in result.stdout


_bumps = [
    ("bump-major", "1.0.0", "Version bumped (MAJOR): 0.0.0 -> 1.0.0"),
    ("bump-minor", "0.1.0", "Version bumped (MINOR): 0.0.0 -> 0.1.0"),
    ("bump-patch", "0.0.1", "Version bumped (PATCH): 0.0.0 -> 0.0.1"),
    ("bump-rc", "0.0.0-RC1", "Version bumped (RC): 0.0.0 -> 0.0.0-RC1"),
    ("release", "0.0.0", "Version released: 0.0.0 -> 0.0.0"),
]


@pytest.mark.parametrize(
    "command,new_version,log_message", _bumps, ids=[cmd for cmd, *_ in _bumps]
)
def test_bump_commands(version_path, info_logs, command, new_version, log_message):
    result = run(f"--file {version_path} {command}")
    assert result.stdout.strip() == new_version
    assert log_message in info_logs.text
    assert version_path.exists()


def test_default_file_in_cwd(settings, monkeypatch):
    monkeypatch.delenv("VERSION_STORE_FILE", raising=False)
    run("bump-minor")
    assert read_props(settings.file)["minor"] == "1"


def test_file_from_env(tmp_path, monkeypatch):
    path = tmp_path / "env.properties"
    monkeypatch.setenv("VERSION_STORE_FILE", str(path))
    run("bump-patch")
    assert read_props(path)["patch"] == "1"


def test_release_flow(version_path, info_logs):
    for command in ["bump-minor", "bump-rc", "bump-rc"]:
        run(f"-f {version_path} {command}")
    assert run(f"-f {version_path} show").stdout.strip() == "0.1.0-RC2"
    assert run(f"-f {version_path} release").stdout.strip() == "0.1.0"
    assert "Version released: 0.1.0-RC2 -> 0.1.0" in info_logs.text
    assert read_props(version_path) == {
        "major": "0",
        "minor": "1",
        "patch": "0",
        "releaseCandidate": "0",
    }


def test_set_and_show_json(version_path):
    assert run(f"-f {version_path} set 2.3.4-RC5").stdout.strip() == "2.3.4-RC5"
    output = run(f"-f {version_path} show --format json").stdout
    for expected in ['"name"', '"2.3.4-RC5"', '"releaseCandidate"', "5"]:
        assert expected in output


def test_show_yaml(version_path):
    run(f"-f {version_path} set 1.0.0")
    output = run(f"-f {version_path} show --format yaml").stdout
    assert "major: 1" in output
    assert "name: 1.0.0" in output


def test_set_invalid_version(version_path):
    result = run(f"-f {version_path} set 1.0", exit_code=2)
    assert "Invalid version string" in result.output
    assert not version_path.exists()


def test_corrupt_file_exit_code(version_path):
    version_path.write_text("major=abc\n")
    result = run(f"-f {version_path} bump-major", exit_code=EXIT_CODE_INIT_ERROR)
    assert "Invalid integer for property 'major'" in result.output
    assert version_path.read_text() == "major=abc\n"


def test_persist_error_exit_code(version_path, monkeypatch):
    run(f"-f {version_path} show")

    def fail_write(*_):
        raise PermissionError("read-only file system")

    monkeypatch.setattr("version_store.store.write_record", fail_write)
    result = run(f"-f {version_path} bump-patch", exit_code=EXIT_CODE_PERSIST_ERROR)
    assert "Could not write version 0.0.1" in result.output
    assert read_props(version_path)["patch"] == "0"


def test_unknown_log_level_exit_code(version_path):
    result = run(f"--log-level verbose -f {version_path} show", exit_code=2)
    assert "Unknown log level" in result.output
    assert not version_path.exists()
