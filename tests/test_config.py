"""
Tests for configuration loading and the request log side channel.
"""
import pytest

from core import log_sink
from core.config import ENV_OVERRIDES, ConfigLoader, apply_env_overrides, get_config
from core.errors import ConfigurationError
from utils.endpoints import compact, get_api_root, rest_base, taxonomy_base


@pytest.fixture
def fresh_config(monkeypatch, tmp_path):
    for name in ENV_OVERRIDES:
        monkeypatch.setenv(name, "")
    monkeypatch.chdir(tmp_path)
    ConfigLoader.reset()
    yield tmp_path
    ConfigLoader.reset()


class TestConfigLoader:
    """Tests for ConfigLoader."""

    def test_loads_yaml_file(self, fresh_config, monkeypatch):
        config_file = fresh_config / "config.yaml"
        config_file.write_text("wordpress:\n  site_url: https://shop.test\nacf:\n  backend: acf_v3\n")
        monkeypatch.setenv("WP_MCP_CONFIG", str(config_file))

        config = get_config()

        assert config["wordpress"]["site_url"] == "https://shop.test"
        assert config["acf"]["backend"] == "acf_v3"

    def test_environment_wins(self, fresh_config, monkeypatch):
        config_file = fresh_config / "config.yaml"
        config_file.write_text("wordpress:\n  site_url: https://shop.test\n")
        monkeypatch.setenv("WP_MCP_CONFIG", str(config_file))
        monkeypatch.setenv("WORDPRESS_SITE_URL", "https://staging.shop.test")

        assert get_config()["wordpress"]["site_url"] == "https://staging.shop.test"

    def test_missing_file_is_empty(self, fresh_config, monkeypatch):
        monkeypatch.setenv("WP_MCP_CONFIG", str(fresh_config / "absent.yaml"))

        assert get_config() == {}

    def test_singleton(self, fresh_config, monkeypatch):
        monkeypatch.setenv("WP_MCP_CONFIG", str(fresh_config / "absent.yaml"))

        assert ConfigLoader() is ConfigLoader()


class TestApplyEnvOverrides:
    """Tests for apply_env_overrides."""

    def test_does_not_mutate_input(self):
        config = {"wordpress": {"site_url": "a"}}

        merged = apply_env_overrides(config, {"WOO_CONSUMER_KEY": "ck"})

        assert merged["woocommerce"] == {"consumer_key": "ck"}
        assert config == {"wordpress": {"site_url": "a"}}


class TestEndpoints:
    """Tests for utils.endpoints."""

    def test_api_root(self):
        assert get_api_root({"wordpress": {"site_url": "https://shop.test/"}}) == "https://shop.test/wp-json"

    def test_api_root_requires_site(self):
        with pytest.raises(ConfigurationError):
            get_api_root({})

    def test_rest_base(self):
        assert rest_base("post") == "posts"
        assert rest_base("page") == "pages"
        assert rest_base("product") == "product"

    def test_taxonomy_base(self):
        assert taxonomy_base("category") == "categories"
        assert taxonomy_base("post_tag") == "tags"
        assert taxonomy_base("product_cat") == "product_cat"

    def test_compact_keeps_falsy_values(self):
        assert compact({"a": None, "b": 0, "c": False, "d": ""}) == {"b": 0, "c": False, "d": ""}


class TestLogSink:
    """Tests for core.log_sink."""

    def test_messages_reach_installed_sink(self, list_sink):
        log_sink.log_to_file("hello")

        assert list_sink.messages == ["hello"]

    def test_failing_sink_is_contained(self):
        class Broken:
            def write(self, message):
                raise OSError("disk full")

        log_sink.set_log_sink(Broken())

        log_sink.log_to_file("hello")
