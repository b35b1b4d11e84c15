"""Settings and presets for azure-dump-fetch.

Values are read from environment variables first, then from the properties
file at ~/.azure-dump-fetch/settings.properties, then from defaults.
"""

import os
import logging
import configparser
from collections import namedtuple
from pathlib import Path

from azure_dump_fetch.errors import OperatorError
from azure_dump_fetch.models import Preset

PROPERTIES_FILE = Path.home() / '.azure-dump-fetch' / 'settings.properties'
SETTINGS_SECTION = 'azure-dump-fetch'
PRESET_SECTION_PREFIX = 'preset:'

DEFAULT_RESOURCE_GROUP_SUFFIX = '-rg'
DEFAULT_CONTAINER_LIMIT = 10
DEFAULT_AZ_PATH = 'az'

Settings = namedtuple('Settings', ['target_directory', 'resource_group_suffix', 'container_limit', 'az_path'])


def load_config(path=None):
    """Read the properties file if it exists.

    Args:
        path (str or Path, optional): Properties file. Defaults to PROPERTIES_FILE.

    Returns:
        configparser.ConfigParser: Parsed file, empty when the file is missing
    """
    properties_file_path = Path(path) if path else PROPERTIES_FILE
    config = configparser.ConfigParser()

    if properties_file_path.exists():
        config.read(properties_file_path)
        logging.info('Loaded configuration from %s', properties_file_path)
    else:
        logging.info('Properties file not found at %s, using environment variables or defaults.',
                     properties_file_path)
    return config


def get_config_value(config, env_var, prop_key, default=None):
    """Return the environment value, else the properties file value, else ``default``."""
    value = os.getenv(env_var)
    if value:
        return value
    if SETTINGS_SECTION in config and prop_key in config[SETTINGS_SECTION]:
        return config[SETTINGS_SECTION][prop_key]
    return default


def load_settings(config):
    """Build the run settings.

    Raises:
        OperatorError: If container_limit is not a positive integer
    """
    limit_str = get_config_value(
        config, 'AZURE_DUMP_FETCH_CONTAINER_LIMIT', 'container_limit', str(DEFAULT_CONTAINER_LIMIT)
    )
    try:
        container_limit = int(limit_str)
    except ValueError:
        container_limit = 0
    if container_limit < 1:
        raise OperatorError(f"container_limit must be a positive integer, got '{limit_str}'",
                            reason='configuration')

    return Settings(
        target_directory=get_config_value(config, 'AZURE_DUMP_FETCH_TARGET_DIRECTORY', 'target_directory'),
        resource_group_suffix=get_config_value(
            config, 'AZURE_DUMP_FETCH_RG_SUFFIX', 'resource_group_suffix', DEFAULT_RESOURCE_GROUP_SUFFIX
        ),
        container_limit=container_limit,
        az_path=get_config_value(config, 'AZURE_DUMP_FETCH_AZ_PATH', 'az_path', DEFAULT_AZ_PATH),
    )


def load_presets(config):
    """Collect ``[preset:<key>]`` sections into a dict keyed by preset key.

    Raises:
        OperatorError: If a preset section has no subscription
    """
    presets = {}
    for section in config.sections():
        if not section.startswith(PRESET_SECTION_PREFIX):
            continue
        key = section[len(PRESET_SECTION_PREFIX):].strip()
        subscription = config[section].get('subscription', '').strip()
        if not key or not subscription:
            raise OperatorError(f"Preset section [{section}] needs a name and a 'subscription' value",
                                reason='configuration')
        resource_group = config[section].get('resource_group', '').strip() or None
        presets[key] = Preset(key=key, subscription=subscription, resource_group=resource_group)
    return presets
