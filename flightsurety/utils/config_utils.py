"""Utility functions for configuration handling."""

import logging
import re
from typing import Dict, NamedTuple, Optional

import yaml

from flightsurety.utils.exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_NETWORK = "localhost"


class NetworkConfig(NamedTuple):
    """Endpoint and contract addresses of one named network."""

    name: str
    url: str
    app_address: str
    data_address: str


class OraclesConfig(NamedTuple):
    """Settings for oracle registration and response submission."""

    pool_size: int = 20
    first_account: int = 0
    max_concurrency: int = 5
    workers: int = 2
    poll_interval: float = 2.0
    gas: int = 500000
    status_policy: str = "random"
    refresh_indexes: bool = False


# Load Configuration
def load_config(config_path="config.yml") -> Dict:
    """
    Load the configuration from the specified file path, handling includes and placeholders.
    config.yml takes priority over the included file.
    """
    logger.info("Loading configuration from %s", config_path)
    config = load_yaml_file(config_path)

    # Handle included configurations if present
    if "include" in config:
        included_config_path = config["include"]
        logger.info("Loading included configuration from %s", included_config_path)
        included_config = load_yaml_file(included_config_path)

        merged_config = merge_configs(included_config, config)
        logger.info("Merged main and included configurations")

        merged_config.pop("include", None)
    else:
        included_config = {}
        merged_config = config

    replace_placeholders(merged_config, merged_config)
    warn_conflicting_values(config, included_config)

    return merged_config


def load_yaml_file(file_path):
    """Helper function to load a YAML file."""
    try:
        with open(file_path, "r", encoding="UTF-8") as file:
            return yaml.safe_load(file) or {}
    except FileNotFoundError as exc:
        raise ConfigError(f"Configuration file not found: {file_path}") from exc


def merge_configs(base_config, override_config):
    """Recursively merge two configurations, with override_config taking priority."""
    merged = base_config.copy()
    for key, value in override_config.items():
        if isinstance(value, dict) and key in merged and isinstance(merged[key], dict):
            merged[key] = merge_configs(merged[key], value)
        else:
            merged[key] = value
    return merged


def replace_placeholders(config, dynamic_values):
    """Recursively replace placeholders in the configuration, if any."""
    if isinstance(config, dict):
        for key, value in config.items():
            if isinstance(value, (dict, list)):
                replace_placeholders(value, dynamic_values)
            elif isinstance(value, str):
                config[key] = resolve_placeholder(value, dynamic_values)
    elif isinstance(config, list):
        for i, item in enumerate(config):
            if isinstance(item, (dict, list)):
                replace_placeholders(item, dynamic_values)
            elif isinstance(item, str):
                config[i] = resolve_placeholder(item, dynamic_values)
    return config


def resolve_placeholder(value, dynamic_values):
    """Resolve a single placeholder string."""
    pattern = r"<%=\s*@(\w+)\s*%>"
    match = re.search(pattern, value)
    if match:
        placeholder = match.group(1)
        return dynamic_values.get(placeholder, value)
    return value


def warn_conflicting_values(config: Dict, included_config: Dict):
    """Warn users if there are conflicting values between the two files,
    showing which value will be used."""
    for key, value in included_config.items():
        if key in config and config[key] != value:
            logger.warning(
                "Conflicting value for '%s'. Using value from main config: %s",
                key,
                config[key],
            )


def get_network_config(config: Dict, network: Optional[str] = None) -> NetworkConfig:
    """Resolve the network entry selected by name (or by the `network` key)."""
    name = network or config.get("network", DEFAULT_NETWORK)
    networks = config.get("Networks") or {}
    entry = networks.get(name)
    if not entry:
        raise ConfigError(f"No configuration entry for network '{name}'")

    url = entry.get("url")
    app_address = entry.get("app_address")
    if not url or not app_address:
        raise ConfigError(f"Network '{name}' needs both 'url' and 'app_address'")

    data_address = entry.get("data_address")
    if not data_address:
        logger.warning(
            "No data_address for network '%s'; using the app address for the data contract",
            name,
        )
        data_address = app_address

    return NetworkConfig(
        name=name, url=url, app_address=app_address, data_address=data_address
    )


def parse_oracles_config(config: Dict) -> OraclesConfig:
    """Build the oracle settings, falling back to defaults for missing keys."""
    section = config.get("Oracles") or {}
    defaults = OraclesConfig()
    return OraclesConfig(
        pool_size=int(section.get("pool_size", defaults.pool_size)),
        first_account=int(section.get("first_account", defaults.first_account)),
        max_concurrency=int(section.get("max_concurrency", defaults.max_concurrency)),
        workers=int(section.get("workers", defaults.workers)),
        poll_interval=float(section.get("poll_interval", defaults.poll_interval)),
        gas=int(section.get("gas", defaults.gas)),
        status_policy=section.get("status_policy", defaults.status_policy),
        refresh_indexes=bool(section.get("refresh_indexes", defaults.refresh_indexes)),
    )
