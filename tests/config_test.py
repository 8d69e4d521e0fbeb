from concurrent.futures import ThreadPoolExecutor

import pytest

from specter.core.config import _ALLOWED_LOG_LEVELS
from specter.core.config import _DEFAULT_LOG_DATEFMT
from specter.core.config import _DEFAULT_LOG_FMT
from specter.core.config import Config
from specter.core.config import ConsoleLoggerConfig
from specter.core.config import FileLoggerConfig
from specter.core.config import LoggerConfig
from specter.core.config import TelemetryConfig
from specter.core.config import TTYLoggerConfig
from specter.core.config import config_property
from specter.core.error import ConfigValidationError as Error


@pytest.fixture
def factory():
    def _create_settings_class(name="setting", default=None, **kwargs):
        class Settings:
            pass

        _property = config_property(default, **kwargs)
        _property.__set_name__(Settings, name)
        setattr(Settings, name, _property)
        return Settings

    return _create_settings_class


@pytest.mark.unit
class TestConfigProperty:
    @pytest.mark.parametrize(
        "default, frozen, description",
        [
            ("stub", True, "Double used in place of a collaborator"),
            (3, False, "Retries"),
            ((), True, None),
        ],
    )
    def test_init_with_parameters(self, default, frozen, description):
        _property = config_property(
            default,
            frozen=frozen,
            description=description,
        )
        assert _property.default == default
        assert _property.frozen is frozen
        assert _property.description == description
        assert _property.allowed is None
        assert _property.check is None
        assert _property.between is None
        assert _property.property == ""
        assert _property.locks == {}

    def test_init_with_defaults(self):
        _property = config_property(None)
        assert _property.default is None
        assert _property.frozen is False
        assert _property.description is None
        assert _property.property == ""
        assert _property.validate is False

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"allowed": ("a", "b")},
            {"check": bool},
            {"between": (0, 1)},
        ],
    )
    def test_constraints_enable_validation(self, kwargs):
        assert config_property("a", **kwargs).validate is True

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("level", "_level"),
            ("max_size", "_max_size"),
            ("as_json", "_as_json"),
        ],
    )
    def test_set_name_configures_name(self, name, expected, factory):
        Settings = factory(name, "mock")
        descriptor = getattr(Settings, name)
        assert descriptor.property == expected
        assert descriptor.default == "mock"
        assert getattr(Settings, expected) == "mock"

    def test_invalid_default_fails_at_class_creation(self, factory):
        with pytest.raises(Error, match="got invalid value for 'double'"):
            factory("double", "fake", allowed=("stub", "spy", "mock"))

    @pytest.mark.parametrize(
        "allowed, valid, invalid",
        [
            (("stub", "spy", "mock"), "spy", "fake"),
            ((-1, 1), -1, 0),
            ((True, False), False, None),
            (("DEBUG", "INFO", "ERROR"), "INFO", "TRACE"),
        ],
    )
    def test_set_value_with_validation(self, allowed, valid, invalid, factory):
        Settings = factory("double", valid, allowed=allowed)
        instance = Settings()
        instance.double = valid
        assert instance.double == valid
        with pytest.raises(Error, match="not one of the allowed values"):
            instance.double = invalid
        assert instance.double == valid

    @pytest.mark.parametrize(
        "default, between, valids, invalids",
        [
            (7, (1, 10), [1, 5, 10], [0, 11]),
            (0.5, (0.0, 1.0), [0.0, 0.5, 1.0], [-0.1, 1.1]),
            (0, (-5, 5), [-5, 0, 5], [-6, 6]),
        ],
    )
    def test_validate_between(self, default, between, valids, invalids):
        _property = config_property(default, between=between)
        for value in valids:
            _property.__validate__(value)
        for value in invalids:
            with pytest.raises(Error, match="is not between"):
                _property.__validate__(value)

    @pytest.mark.parametrize("between", [("a", "z"), ([1], [2]), (None, 5)])
    def test_validate_between_invalid_ranges(self, between):
        _property = config_property(None, between=between)
        with pytest.raises(Error, match="must be a tuple of two numbers"):
            _property.__validate__(5)

    def test_check_failure(self):
        _property = config_property(1, check=lambda x: x > 0)
        with pytest.raises(Error, match="property validation failed"):
            _property.__validate__(-1)

    def test_check_raising_is_wrapped(self):
        _property = config_property(1, check=lambda x: x > 0)
        with pytest.raises(Error, match="with message"):
            _property.__validate__("one")

    def test_frozen(self, factory):
        Settings = factory("name", "specter", frozen=True)
        instance = Settings()
        assert instance.name == "specter"
        with pytest.raises(Error, match="cannot modify frozen property"):
            instance.name = "spectre"
        assert instance.name == "specter"

    @pytest.mark.parametrize("default", [None, 0, "", [], {}, True])
    def test_unvalidated_values_round_trip(self, default, factory):
        Settings = factory("value", default)
        instance = Settings()
        assert instance.value == default
        instance.value = "changed"
        assert instance.value == "changed"
        assert Settings().value == default

    @pytest.mark.slow
    @pytest.mark.parametrize("threads, iterations", [(5, 100), (20, 500)])
    def test_thread_safety(self, threads, iterations, factory):
        levels = list(_ALLOWED_LOG_LEVELS)
        Settings = factory("level", "DEBUG", allowed=levels)
        shared = Settings()
        results = []
        errors = []

        def worker(wid):
            try:
                for index in range(iterations):
                    shared.level = levels[(wid + index) % len(levels)]
                    results.append(shared.level)
            except Exception as e:
                errors.append(f"Worker {wid} error: {e}")

        with ThreadPoolExecutor(max_workers=threads) as executor:
            futures = [executor.submit(worker, i) for i in range(threads)]
            for future in futures:
                future.result()
        assert errors == []
        assert len(results) == threads * iterations
        assert set(results) <= set(levels)


@pytest.mark.integration
class TestFileLoggerConfig:
    @pytest.fixture
    def config(self):
        return FileLoggerConfig()

    def test_defaults(self, config):
        assert config.enable is False
        assert config.level == "INFO"
        assert config.fmt == _DEFAULT_LOG_FMT
        assert config.path == "logs/specter.log"
        assert config.encoding == "utf-8"
        assert config.max_size == "10MB"
        assert config.backups == 5

    @pytest.mark.parametrize("level", list(_ALLOWED_LOG_LEVELS))
    def test_level_allowed(self, config, level):
        config.level = level
        assert config.level == level

    @pytest.mark.parametrize("invalid", ["debug", "Info", "trace"])
    def test_level_invalids(self, config, invalid):
        with pytest.raises(Error):
            config.level = invalid

    @pytest.mark.parametrize("invalid", ["", "   ", None, 42])
    def test_path_invalids(self, config, invalid):
        with pytest.raises(Error):
            config.path = invalid

    @pytest.mark.parametrize("backups", [0, 1, 100])
    def test_backups_valid(self, config, backups):
        config.backups = backups
        assert config.backups == backups

    def test_backups_negative(self, config):
        with pytest.raises(Error):
            config.backups = -1

    def test_encoding_frozen(self, config):
        with pytest.raises(Error, match="cannot modify frozen property"):
            config.encoding = "latin-1"


@pytest.mark.integration
class TestConsoleLoggerConfig:
    @pytest.fixture
    def config(self):
        return ConsoleLoggerConfig()

    def test_defaults(self, config):
        assert config.enable is True
        assert config.level == "DEBUG"
        assert config.fmt == _DEFAULT_LOG_FMT
        assert config.colour is True

    def test_tty_alias(self):
        assert TTYLoggerConfig is ConsoleLoggerConfig

    @pytest.mark.parametrize("invalid", ["true", 2, "yes"])
    def test_colour_validation(self, config, invalid):
        with pytest.raises(Error):
            config.colour = invalid


@pytest.mark.integration
class TestLoggerConfig:
    @pytest.fixture
    def config(self):
        return LoggerConfig()

    def test_defaults(self, config):
        assert config.level == "DEBUG"
        assert config.datefmt == _DEFAULT_LOG_DATEFMT
        assert config.as_json is False
        assert isinstance(config.file, FileLoggerConfig)
        assert isinstance(config.tty, ConsoleLoggerConfig)

    def test_nested_configs_are_per_instance(self, config):
        other = LoggerConfig()
        config.file.level = "ERROR"
        assert other.file.level == "INFO"
        assert config.tty is not other.tty

    def test_level_independence(self):
        first = LoggerConfig()
        second = LoggerConfig()
        first.level = "CRITICAL"
        assert second.level == "DEBUG"


@pytest.mark.integration
class TestTelemetryConfig:
    def test_defaults(self):
        config = TelemetryConfig()
        assert config.enable is False
        assert config.name is None

    def test_enable_validation(self):
        with pytest.raises(Error):
            TelemetryConfig().enable = "on"


@pytest.mark.integration
class TestConfig:
    @pytest.fixture
    def config(self):
        return Config()

    def test_defaults(self, config):
        assert config.name == "specter"
        assert config.version == "18.10.2026"
        assert config.debug is False
        assert isinstance(config.logger, LoggerConfig)
        assert isinstance(config.telemetry, TelemetryConfig)

    @pytest.mark.parametrize(
        "frozen, new",
        [
            ("name", "spectre"),
            ("version", "1.0.0"),
        ],
    )
    def test_frozen_properties(self, config, frozen, new):
        with pytest.raises(Error, match="cannot modify frozen property"):
            setattr(config, frozen, new)

    def test_nested_logger_configuration(self, config):
        config.logger.level = "WARNING"
        assert config.logger.level == "WARNING"
        assert Config().logger.level == "DEBUG"


@pytest.mark.extensive
class TestExtensiveValidation:
    @pytest.mark.performance
    @pytest.mark.parametrize(
        "load",
        [
            pytest.param((5, 200), marks=pytest.mark.fast),
            pytest.param((20, 1000), marks=pytest.mark.slow),
        ],
    )
    def test_validation_under_contention(self, load):
        threads, iterations = load
        valids = ["stub", "spy", "mock", "fake", "dummy"]

        class Doubles:
            kind = config_property("stub", allowed=set(valids))

        instances = [Doubles() for _ in range(3)]
        errors = []

        def worker(wid):
            target = instances[wid % len(instances)]
            try:
                for index in range(iterations):
                    target.kind = valids[index % len(valids)]
                    if target.kind not in valids:
                        errors.append(f"Invalid value: {target.kind}")
            except Exception as e:
                errors.append(str(e))

        with ThreadPoolExecutor(max_workers=threads) as ex:
            futures = [ex.submit(worker, i) for i in range(threads)]
            for future in futures:
                future.result()
        assert errors == []

    @pytest.mark.parametrize("count", [3, 5, 10])
    def test_config_instantiation_isolation(self, count):
        allowed = list(_ALLOWED_LOG_LEVELS)
        configs = [Config() for _ in range(count)]
        for index, config in enumerate(configs):
            config.logger.tty.level = allowed[index % len(allowed)]
        for index, config in enumerate(configs):
            assert config.logger.tty.level == allowed[index % len(allowed)]
