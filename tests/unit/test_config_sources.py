from dataclasses import dataclass
from datetime import timedelta

import pytest

from typedenv import (
    DotenvEnvironment,
    EnvConfig,
    InvalidFormatError,
    MappingEnvironment,
    MustGetError,
    NotFoundError,
    UnsupportedTypeError,
    env_field,
    load,
)


@dataclass
class ServiceConfig:
    host: str = env_field("SVC_HOST", default="")
    port: int = env_field("SVC_PORT", fallback="80", default=0)
    poll: timedelta = env_field("SVC_POLL", fallback="10s", default=timedelta())


def test_env_config_over_mapping():
    cfg = EnvConfig(MappingEnvironment({"X_INT": "42", "X_EMPTY": "", "X_BAD": "4x2", "X_NONE": None}))

    assert cfg.get_int("X_INT", 0) == 42
    assert cfg.get_int("X_EMPTY", 7) == 7
    assert cfg.get_int("X_NONE", 8) == 8
    assert cfg.get_int("X_BAD", 9) == 9

    with pytest.raises(NotFoundError):
        cfg.try_get_int("X_EMPTY")
    with pytest.raises(InvalidFormatError):
        cfg.try_get_int("X_BAD")
    with pytest.raises(MustGetError):
        cfg.must_get_int("X_MISSING")


def test_mapping_environment_is_not_copied():
    values = {"X_STR": "a"}
    cfg = EnvConfig(MappingEnvironment(values))
    assert cfg.must_get_str("X_STR") == "a"

    values["X_STR"] = "b"
    assert cfg.must_get_str("X_STR") == "b"


def test_raw_returns_text_untouched():
    cfg = EnvConfig(MappingEnvironment({"X_RAW": " 12 "}))
    assert cfg.raw("X_RAW") == " 12 "
    with pytest.raises(InvalidFormatError):
        cfg.try_get_int("X_RAW")


def test_generic_accessor_rejects_unsupported_type():
    cfg = EnvConfig(MappingEnvironment({"X_LIST": "a,b"}))

    with pytest.raises(UnsupportedTypeError):
        cfg.try_get("X_LIST", list)
    with pytest.raises(UnsupportedTypeError):
        cfg.get("X_LIST", list, [])
    with pytest.raises(UnsupportedTypeError):
        cfg.must_get("X_LIST", list)


def test_dotenv_environment(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text('SVC_HOST=db.internal\nSVC_PORT=5432\n# comment\nSVC_EMPTY=\n', encoding="utf-8")

    cfg = EnvConfig(DotenvEnvironment(env_file))

    assert cfg.must_get_str("SVC_HOST") == "db.internal"
    assert cfg.must_get_int("SVC_PORT") == 5432
    assert cfg.get_str("SVC_EMPTY", "fb") == "fb"
    assert cfg.get_str("SVC_MISSING", "fb") == "fb"


def test_dotenv_file_is_reread(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("SVC_PORT=1\n", encoding="utf-8")
    cfg = EnvConfig(DotenvEnvironment(env_file))
    assert cfg.try_get_int("SVC_PORT") == 1

    env_file.write_text("SVC_PORT=2\n", encoding="utf-8")
    assert cfg.try_get_int("SVC_PORT") == 2


def test_dotenv_missing_file_reads_as_empty(tmp_path):
    cfg = EnvConfig(DotenvEnvironment(tmp_path / "absent.env"))
    with pytest.raises(NotFoundError):
        cfg.try_get_str("SVC_HOST")


def test_load_from_dotenv(tmp_path, monkeypatch):
    monkeypatch.setenv("SVC_HOST", "from-process")
    env_file = tmp_path / ".env"
    env_file.write_text("SVC_HOST=from-file\nSVC_POLL=250ms\n", encoding="utf-8")

    target = ServiceConfig()
    EnvConfig(DotenvEnvironment(env_file)).load(target)

    assert target.host == "from-file"
    assert target.port == 80
    assert target.poll == timedelta(milliseconds=250)


def test_load_with_mapping_env_argument():
    target = ServiceConfig()
    load(target, MappingEnvironment({"SVC_HOST": "h", "SVC_PORT": "81"}))

    assert (target.host, target.port, target.poll) == ("h", 81, timedelta(seconds=10))
