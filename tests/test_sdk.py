"""Tests for the python-dotenv-style SDK (load_dotenv, dotenv_values)."""

from __future__ import annotations

import os

import pytest

from envscan import FormatError, dotenv_values, load_dotenv
from envscan.config import EnvscanConfig


@pytest.fixture()
def env_pair(tmp_path):
    first = tmp_path / ".env.local"
    first.write_text("SHARED=local\nLOCAL_ONLY=1\n")
    second = tmp_path / ".env"
    second.write_text("SHARED=base\nBASE_ONLY=2\n")
    return first, second


@pytest.fixture()
def clean_environ(monkeypatch):
    """Remove keys the tests set so os.environ is restored afterwards."""
    keys = ("SHARED", "LOCAL_ONLY", "BASE_ONLY", "ENVSCAN_SDK_A", "ENVSCAN_SDK_B")
    for key in keys:
        monkeypatch.delenv(key, raising=False)
    yield
    for key in keys:
        os.environ.pop(key, None)


def test_dotenv_values_single_path(sample_env):
    values = dotenv_values(sample_env)
    assert values["TWILIO_AUTH_TOKEN"] == "my secret token"
    assert "INLINE_COMMENT" in values


def test_earlier_files_win(env_pair):
    values = dotenv_values(list(env_pair))
    assert values == {"SHARED": "local", "LOCAL_ONLY": "1", "BASE_ONLY": "2"}


def test_missing_files_skipped(tmp_path, env_pair):
    values = dotenv_values([tmp_path / "nope.env", env_pair[1]])
    assert values == {"SHARED": "base", "BASE_ONLY": "2"}


def test_missing_file_raises_when_required(tmp_path):
    with pytest.raises(FileNotFoundError):
        dotenv_values(tmp_path / "nope.env", missing_ok=False)


def test_default_path_is_dot_env_in_cwd():
    with open(".env", "w") as f:
        f.write("FROM_CWD=yes\n")
    assert dotenv_values() == {"FROM_CWD": "yes"}


def test_paths_from_config(tmp_path):
    (tmp_path / "a.env").write_text("A=1\n")
    cfg = EnvscanConfig(files=["a.env"], config_path=tmp_path / ".envscan.toml")
    assert dotenv_values(config=cfg) == {"A": "1"}


def test_substitutions_enabled_by_default(tmp_path, monkeypatch):
    monkeypatch.setenv("ENVSCAN_SDK_HOME", "/home/sdk")
    p = tmp_path / ".env"
    p.write_text("DIR=${ENVSCAN_SDK_HOME}/app\nRAW='$ENVSCAN_SDK_HOME'\n")
    assert dotenv_values(p) == {"DIR": "/home/sdk/app", "RAW": "$ENVSCAN_SDK_HOME"}


def test_substitutions_disabled(tmp_path):
    p = tmp_path / ".env"
    p.write_text("DIR=$HOME/app\n")
    assert dotenv_values(p, substitutions=[]) == {"DIR": "$HOME/app"}


def test_substitutions_from_config(tmp_path):
    p = tmp_path / ".env"
    p.write_text("DIR=$HOME/app\n")
    cfg = EnvscanConfig(substitutions=[])
    assert dotenv_values(p, config=cfg) == {"DIR": "$HOME/app"}


def test_unknown_substitution_name(tmp_path):
    p = tmp_path / ".env"
    p.write_text("A=1\n")
    with pytest.raises(KeyError):
        dotenv_values(p, substitutions=["nope"])


def test_format_error_propagates(tmp_path):
    p = tmp_path / ".env"
    p.write_text("A=1\n\nB=2\n")
    with pytest.raises(FormatError, match="expected statement"):
        dotenv_values(p)


def test_load_dotenv_sets_environ(tmp_path, clean_environ):
    p = tmp_path / ".env"
    p.write_text("ENVSCAN_SDK_A=alpha\nENVSCAN_SDK_B=beta\n")
    assert load_dotenv(p) is True
    assert os.environ["ENVSCAN_SDK_A"] == "alpha"
    assert os.environ["ENVSCAN_SDK_B"] == "beta"


def test_load_dotenv_does_not_override_by_default(tmp_path, clean_environ):
    os.environ["ENVSCAN_SDK_A"] = "already_set"
    p = tmp_path / ".env"
    p.write_text("ENVSCAN_SDK_A=alpha\nENVSCAN_SDK_B=beta\n")
    assert load_dotenv(p) is True
    assert os.environ["ENVSCAN_SDK_A"] == "already_set"
    assert os.environ["ENVSCAN_SDK_B"] == "beta"


def test_load_dotenv_override(tmp_path, clean_environ):
    os.environ["ENVSCAN_SDK_A"] = "already_set"
    p = tmp_path / ".env"
    p.write_text("ENVSCAN_SDK_A=alpha\n")
    assert load_dotenv(p, override=True) is True
    assert os.environ["ENVSCAN_SDK_A"] == "alpha"


def test_load_dotenv_override_from_config(tmp_path, clean_environ):
    os.environ["ENVSCAN_SDK_A"] = "already_set"
    p = tmp_path / ".env"
    p.write_text("ENVSCAN_SDK_A=alpha\n")
    assert load_dotenv(p, config=EnvscanConfig(override=True)) is True
    assert os.environ["ENVSCAN_SDK_A"] == "alpha"


def test_load_dotenv_nothing_set(tmp_path, clean_environ):
    os.environ["ENVSCAN_SDK_A"] = "already_set"
    p = tmp_path / ".env"
    p.write_text("ENVSCAN_SDK_A=alpha\n")
    assert load_dotenv(p) is False
    assert load_dotenv(tmp_path / "missing.env") is False


def test_load_dotenv_failure_leaves_environ_untouched(tmp_path, clean_environ):
    p = tmp_path / ".env"
    p.write_text('ENVSCAN_SDK_A=alpha\nENVSCAN_SDK_B="unterminated\n')
    with pytest.raises(FormatError):
        load_dotenv(p)
    assert "ENVSCAN_SDK_A" not in os.environ
