"""End-to-end parsing: defaults, file, environment and key scoping."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

import pytest

from configo import DecodeError, Option, ShapeError, conf, must_parse, parse
from configo.adapters.memory import InMemorySources
from configo.composition import AppServices

WriteConfig = Callable[[str, str], str]


@dataclass
class Server:
    port: int = conf("port", default="80")


@dataclass
class Simple:
    address: str = conf("address", default="127.0.0.1")
    port: int = conf("port", default="80")


@dataclass
class Tls:
    enabled: bool = conf("enabled", default="true")


@dataclass
class Http:
    tls: Tls = conf("tls")
    address: str = conf("address", default="127.0.0.1")
    port: int = conf("port", default="80")


@dataclass
class Nested:
    http: Http = conf("http")


@dataclass
class HttpPointer:
    tls: Tls = conf("tls")
    address: str = conf("address", default="127.0.0.1")
    port: int | None = conf("port", default="80")


@dataclass
class StructPointers:
    http: HttpPointer | None = conf("http")


@dataclass
class SectionConf:
    env: str = conf("env", default="test")


@dataclass
class EnvConf:
    test: SectionConf = conf("test")


@dataclass
class Untagged:
    note: str = "zero"
    port: int = conf("port", default="80")


@dataclass
class Flags:
    port: int = conf("port", default="80")
    debug: bool = conf("debug", default="true")


@dataclass
class CapitalTag:
    port: int = conf("Port", default="80")


# ======================== defaults only ========================


@pytest.mark.os_agnostic
def test_parse_without_options_yields_defaults() -> None:
    """Only the declared defaults apply."""
    assert parse(Simple) == Simple(address="127.0.0.1", port=80)


@pytest.mark.os_agnostic
def test_parse_nested_records() -> None:
    """Records nested in records carry their defaults."""
    result = parse(Nested, Option())

    assert result.http.tls.enabled is True
    assert result.http.address == "127.0.0.1"
    assert result.http.port == 80


@pytest.mark.os_agnostic
def test_parse_optional_records_behave_like_plain_ones() -> None:
    """``http.port`` is 80 whether the record is optional or not."""
    result = parse(StructPointers)

    assert result.http is not None
    assert result.http.tls.enabled is True
    assert result.http.port == 80
    assert parse(Nested).http.port == 80


@pytest.mark.os_agnostic
def test_untagged_fields_stay_at_zero_value(testing_services: AppServices, in_memory_sources: InMemorySources) -> None:
    """Data for untagged fields is ignored even when a file provides it."""
    in_memory_sources.files["conf.yaml"] = {"note": "from file", "port": 81}

    result = parse(Untagged, Option(path="conf.yaml"), services=testing_services)

    assert result == Untagged(note="zero", port=81)


@pytest.mark.os_agnostic
def test_each_call_builds_a_fresh_instance() -> None:
    """Results of separate calls are independent objects."""
    first = parse(Nested)
    second = parse(Nested)

    first.http.port = 1

    assert second.http.port == 80


# ======================== precedence ========================


@pytest.mark.os_agnostic
def test_precedence_env_over_file_over_defaults(
    testing_services: AppServices,
    in_memory_sources: InMemorySources,
) -> None:
    """Environment beats file beats default; each layer falls back to the next."""
    in_memory_sources.files["conf.yaml"] = {"port": 8080}
    in_memory_sources.environ["PORT"] = "9090"

    with_env = parse(Server, Option(path="conf.yaml", env_include=True), services=testing_services)
    without_env = parse(Server, Option(path="conf.yaml"), services=testing_services)
    without_file = parse(Server, Option(), services=testing_services)

    assert (with_env.port, without_env.port, without_file.port) == (9090, 8080, 80)


@pytest.mark.os_agnostic
def test_precedence_with_real_files(write_config: WriteConfig, monkeypatch: pytest.MonkeyPatch) -> None:
    """The same precedence holds with production adapters."""
    path = write_config("conf.yaml", "port: 8080\n")
    monkeypatch.setenv("PORT", "9090")

    assert parse(Server, Option(path=path, env_include=True)).port == 9090
    assert parse(Server, Option(path=path)).port == 8080


@pytest.mark.os_agnostic
def test_file_merges_recursively_over_defaults(write_config: WriteConfig) -> None:
    """A file setting one nested key keeps the other defaults."""
    path = write_config("conf.json", '{"http": {"tls": {"enabled": false}}}')

    result = parse(Nested, Option(path=path))

    assert result.http.tls.enabled is False
    assert result.http.address == "127.0.0.1"
    assert result.http.port == 80


@pytest.mark.os_agnostic
def test_extension_is_case_insensitive(write_config: WriteConfig) -> None:
    """``CONF.YAML`` is read as YAML."""
    path = write_config("CONF.YAML", "port: 8081\n")

    assert parse(Server, Option(path=path)).port == 8081


@pytest.mark.os_agnostic
def test_file_key_in_other_case_overrides_default(
    testing_services: AppServices,
    in_memory_sources: InMemorySources,
) -> None:
    """A file key differing from the tag only in case still wins over the default."""
    in_memory_sources.files["conf.yaml"] = {"Port": 8080}

    assert parse(Server, Option(path="conf.yaml"), services=testing_services).port == 8080


@pytest.mark.os_agnostic
def test_capitalised_tag_takes_lower_case_file_key(
    testing_services: AppServices,
    in_memory_sources: InMemorySources,
) -> None:
    """A capitalised tag is fed by a lower-case file key."""
    in_memory_sources.files["conf.yaml"] = {"port": 8080}

    assert parse(CapitalTag, Option(path="conf.yaml"), services=testing_services).port == 8080


@pytest.mark.os_agnostic
def test_environment_beats_file_key_in_other_case(
    testing_services: AppServices,
    in_memory_sources: InMemorySources,
) -> None:
    """Case differences never reorder the layers."""
    in_memory_sources.files["conf.json"] = {"HTTP": {"PORT": 8080}}
    in_memory_sources.environ["HTTP_PORT"] = "9090"

    result = parse(Nested, Option(path="conf.json", env_include=True), services=testing_services)

    assert result.http.port == 9090
    assert result.http.tls.enabled is True


# ======================== environment ========================


@pytest.mark.os_agnostic
def test_env_with_prefix(monkeypatch: pytest.MonkeyPatch) -> None:
    """``CONFIGO_TEST_ENV`` feeds ``test.env`` under prefix CONFIGO."""
    monkeypatch.setenv("CONFIGO_TEST_ENV", "test_env")

    result = parse(EnvConf, Option(env_prefix="CONFIGO", env_include=True))

    assert result.test.env == "test_env"


@pytest.mark.os_agnostic
def test_env_without_prefix(monkeypatch: pytest.MonkeyPatch) -> None:
    """Without a prefix the bare path name is used."""
    monkeypatch.setenv("TEST_ENV", "test_env")

    result = parse(EnvConf, Option(env_include=True))

    assert result.test.env == "test_env"


@pytest.mark.os_agnostic
def test_prefixed_lookup_ignores_unprefixed_variable(
    testing_services: AppServices,
    in_memory_sources: InMemorySources,
) -> None:
    """Under prefix APP only ``APP_TEST_ENV`` counts, never ``TEST_ENV``."""
    in_memory_sources.environ["TEST_ENV"] = "bare"

    unprefixed = parse(EnvConf, Option(env_prefix="APP", env_include=True), services=testing_services)
    in_memory_sources.environ["APP_TEST_ENV"] = "prefixed"
    prefixed = parse(EnvConf, Option(env_prefix="APP", env_include=True), services=testing_services)

    assert unprefixed.test.env == "test"
    assert prefixed.test.env == "prefixed"


@pytest.mark.os_agnostic
def test_env_ignored_unless_included(testing_services: AppServices, in_memory_sources: InMemorySources) -> None:
    """A prefix alone does not enable environment lookup."""
    in_memory_sources.environ["APP_TEST_ENV"] = "prefixed"

    result = parse(EnvConf, Option(env_prefix="APP"), services=testing_services)

    assert result.test.env == "test"


@pytest.mark.os_agnostic
def test_empty_env_value_counts_as_present(testing_services: AppServices, in_memory_sources: InMemorySources) -> None:
    """An empty variable overrides the default with an empty string."""
    in_memory_sources.environ["TEST_ENV"] = ""

    result = parse(EnvConf, Option(env_include=True), services=testing_services)

    assert result.test.env == ""

@pytest.mark.os_agnostic
def test_empty_env_value_resets_numbers_and_flags(
    testing_services: AppServices,
    in_memory_sources: InMemorySources,
) -> None:
    """Empty variables for int and bool fields decode to zero and false."""
    in_memory_sources.environ.update({"PORT": "", "DEBUG": ""})

    result = parse(Flags, Option(env_include=True), services=testing_services)

    assert result.port == 0
    assert result.debug is False


@pytest.mark.os_agnostic
def test_dotenv_file_uses_prefix_without_env_include(
    write_config: WriteConfig,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Names in a dotenv file are resolved with the prefix even when the process environment is off."""
    path = write_config("app.env", "APP_PORT=8081\n")
    monkeypatch.setenv("APP_PORT", "9999")

    assert parse(Server, Option(path=path, env_prefix="APP")).port == 8081



# ======================== key scoping ========================


@pytest.mark.os_agnostic
def test_key_scoped_parsing(testing_services: AppServices, in_memory_sources: InMemorySources) -> None:
    """``Option.key`` binds the named sub-tree to the shape."""
    in_memory_sources.files["conf.json"] = {"test2": {"test": {"env": "x"}}, "other": {"ignored": True}}

    result = parse(EnvConf, Option(path="conf.json", key="test2"), services=testing_services)

    assert result.test.env == "x"


@pytest.mark.os_agnostic
def test_key_scoped_defaults_apply_without_file() -> None:
    """Defaults are nested under the key, so scoping alone changes nothing."""
    assert parse(EnvConf, Option(key="svc")).test.env == "test"


@pytest.mark.os_agnostic
def test_key_scoped_env_names_include_the_key(
    testing_services: AppServices,
    in_memory_sources: InMemorySources,
) -> None:
    """Environment names follow the full path, key included."""
    in_memory_sources.environ["APP_SVC_TEST_ENV"] = "scoped"

    result = parse(EnvConf, Option(key="svc", env_prefix="APP", env_include=True), services=testing_services)

    assert result.test.env == "scoped"


# ======================== failures ========================


@pytest.mark.os_agnostic
def test_missing_file_is_logged_and_ignored(
    testing_services: AppServices,
    caplog: pytest.LogCaptureFixture,
) -> None:
    """An unreadable file contributes nothing and leaves a warning."""
    with caplog.at_level(logging.WARNING, logger="configo.application.merging"):
        result = parse(Server, Option(path="missing.yaml"), services=testing_services)

    assert result.port == 80
    assert any("unable to read config" in record.getMessage() for record in caplog.records)


@pytest.mark.os_agnostic
def test_unparsable_file_is_ignored(write_config: WriteConfig) -> None:
    """Syntax errors are absorbed like missing files."""
    path = write_config("broken.json", '{"port": ')

    assert parse(Server, Option(path=path)).port == 80


@pytest.mark.os_agnostic
def test_unsupported_extension_is_ignored(write_config: WriteConfig) -> None:
    """An unknown format contributes nothing."""
    path = write_config("conf.ini", "port=1\n")

    assert parse(Server, Option(path=path)).port == 80


@pytest.mark.os_agnostic
def test_type_mismatch_is_propagated(testing_services: AppServices, in_memory_sources: InMemorySources) -> None:
    """Decode failures reach the caller of parse."""
    in_memory_sources.files["conf.yaml"] = {"port": "abc"}

    with pytest.raises(DecodeError) as info:
        parse(Server, Option(path="conf.yaml"), services=testing_services)

    assert info.value.path == "port"


@pytest.mark.os_agnostic
def test_bad_env_value_is_propagated(testing_services: AppServices, in_memory_sources: InMemorySources) -> None:
    """An environment value that cannot be coerced is a decode failure."""
    in_memory_sources.environ["PORT"] = "eighty"

    with pytest.raises(DecodeError):
        parse(Server, Option(env_include=True), services=testing_services)


@pytest.mark.os_agnostic
def test_non_dataclass_shape_is_rejected() -> None:
    """A shape that cannot be described fails before any source is read."""
    with pytest.raises(ShapeError):
        parse(dict)  # type: ignore[type-var]


@pytest.mark.os_agnostic
def test_must_parse_returns_value_on_success() -> None:
    """The halting form behaves like parse when nothing fails."""
    assert must_parse(Server).port == 80


@pytest.mark.os_agnostic
def test_must_parse_halts_on_error(
    testing_services: AppServices,
    in_memory_sources: InMemorySources,
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Any configo error becomes SystemExit(1) with a critical record."""
    in_memory_sources.files["conf.yaml"] = {"port": "abc"}

    with caplog.at_level(logging.CRITICAL), pytest.raises(SystemExit) as info:
        must_parse(Server, Option(path="conf.yaml"), services=testing_services)

    assert info.value.code == 1
    assert isinstance(info.value.__cause__, DecodeError)
    assert any(record.levelno == logging.CRITICAL for record in caplog.records)
