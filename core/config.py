import os
import yaml
from dotenv import load_dotenv


# environment variable -> (section, key)
ENV_OVERRIDES = {
    "WORDPRESS_SITE_URL": ("wordpress", "site_url"),
    "WORDPRESS_USERNAME": ("wordpress", "username"),
    "WORDPRESS_PASSWORD": ("wordpress", "app_password"),
    "WOO_CONSUMER_KEY": ("woocommerce", "consumer_key"),
    "WOO_CONSUMER_SECRET": ("woocommerce", "consumer_secret"),
    "ACF_BACKEND": ("acf", "backend"),
    "WORDPRESS_TIMEOUT": ("http", "timeout"),
}


class ConfigLoader:
    _instance = None
    _config = None

    def __new__(cls):
        """
        Create a singleton instance of ConfigLoader.
        Loads configuration from YAML file on first instantiation.
        """
        if cls._instance is None:
            cls._instance = super(ConfigLoader, cls).__new__(cls)
            cls._load_config()
        return cls._instance

    @classmethod
    def _load_config(cls):
        """
        Load the configuration from the YAML file into the class variable _config,
        then apply environment overrides (a local .env file is honoured).
        """
        config_path = os.environ.get("WP_MCP_CONFIG") or os.path.join(os.path.dirname(__file__), "..", "config.yaml")
        config_path = os.path.abspath(config_path)
        config = {}
        if os.path.isfile(config_path):
            with open(config_path, "r") as f:
                config = yaml.safe_load(f) or {}
        load_dotenv()
        cls._config = apply_env_overrides(config, os.environ)

    @classmethod
    def reset(cls):
        """
        Drop the cached instance so the next access reloads configuration.
        """
        cls._instance = None
        cls._config = None

    def get_config(self):
        """
        Return the loaded configuration dictionary.
        """
        return self._config


def apply_env_overrides(config, environ):
    """Return a copy of `config` with values from `environ` layered on top."""
    merged = {section: dict(values or {}) for section, values in config.items() if isinstance(values, dict)}
    for key, value in config.items():
        if key not in merged:
            merged[key] = value
    for env_name, (section, key) in ENV_OVERRIDES.items():
        value = environ.get(env_name)
        if value:
            merged.setdefault(section, {})[key] = value
    return merged


def get_config():
    """
    Helper function to get the singleton configuration instance's config dictionary.
    """
    return ConfigLoader().get_config()
