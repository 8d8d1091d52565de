"""
Testes de configuração
======================
"""

import pytest
from pydantic import ValidationError

from sluggable import ConfigurationError, SluggableOptions
from sluggable.core.config import Config, config, validate_config


class TestSluggableOptions:

    def test_defaults_from_config(self):
        options = SluggableOptions.resolve()

        assert options.save_to == config.SLUGGABLE_SAVE_TO
        assert options.separator == config.SLUGGABLE_SEPARATOR
        assert options.unique is config.SLUGGABLE_UNIQUE

    def test_overrides_merged(self):
        options = SluggableOptions.resolve({"build_from": "title", "separator": "_"})

        assert options.build_from == ("title",)
        assert options.separator == "_"
        assert options.save_to == "slug"

    def test_build_from_list(self):
        options = SluggableOptions.resolve({"build_from": ["first_name", "last_name"]})
        assert options.build_from == ("first_name", "last_name")

    def test_unknown_option(self):
        with pytest.raises(ConfigurationError):
            SluggableOptions.resolve({"save_too": "slug"})

    def test_invalid_value(self):
        with pytest.raises(ConfigurationError):
            SluggableOptions.resolve({"max_length": "long"})

    def test_reserved_set_normalized(self):
        options = SluggableOptions.resolve({"reserved": {"admin"}})
        assert options.reserved == ("admin",)

    def test_frozen(self):
        options = SluggableOptions.resolve()

        with pytest.raises(ValidationError):
            options.separator = "_"

    @pytest.mark.parametrize("use_cache, expected", [
        (False, None),
        (0, None),
        (True, config.SLUGGABLE_CACHE_TTL),
        (90, 90),
    ])
    def test_cache_ttl(self, use_cache, expected):
        assert SluggableOptions.resolve({"use_cache": use_cache}).cache_ttl == expected


class TestConfig:

    def test_build_from_from_env_list(self):
        settings = Config(SLUGGABLE_BUILD_FROM="first_name, last_name")
        assert settings.sluggable_defaults()["build_from"] == ["first_name", "last_name"]

    def test_build_from_single(self):
        settings = Config(SLUGGABLE_BUILD_FROM="title")
        assert settings.sluggable_defaults()["build_from"] == "title"

    def test_foreign_environment_is_valid(self):
        validate_config(Config(ENVIRONMENT="staging"))

    def test_use_cache_int_is_ttl(self):
        settings = Config(SLUGGABLE_USE_CACHE="1")

        assert type(settings.SLUGGABLE_USE_CACHE) is int
        assert settings.SLUGGABLE_USE_CACHE == 1
        assert SluggableOptions.resolve({"use_cache": settings.SLUGGABLE_USE_CACHE}).cache_ttl == 1

    def test_use_cache_true_uses_default_ttl(self):
        settings = Config(SLUGGABLE_USE_CACHE="true")

        assert settings.SLUGGABLE_USE_CACHE is True
        assert SluggableOptions.resolve({"use_cache": True}).cache_ttl == config.SLUGGABLE_CACHE_TTL

    def test_non_positive_cache_ttl(self):
        with pytest.raises(ValueError):
            validate_config(Config(SLUGGABLE_CACHE_TTL=0))

    def test_empty_separator(self):
        with pytest.raises(ValueError):
            validate_config(Config(SLUGGABLE_SEPARATOR=""))

    def test_valid(self):
        validate_config(Config(ENVIRONMENT="test"))
