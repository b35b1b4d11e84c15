#!/usr/bin/env python3
"""
CLI tool to download a SQL dump and/or static files from Azure Blob Storage.
"""

import sys
import logging

import click

from azure_dump_fetch import DownloadController, OperatorError
from azure_dump_fetch.config import load_config, load_presets, load_settings

# Configure logging to stdout
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S',
    stream=sys.stdout
)


@click.command()
@click.argument('preset', required=False)
def main(preset):
    """
    Download a container from Azure Blob Storage into a local folder.

    Walks through subscription, resource group, container and download
    option menus. PRESET names a [preset:<name>] section of
    ~/.azure-dump-fetch/settings.properties and skips the subscription menu.

    Environment variables / Properties file keys ([azure-dump-fetch] section):
    - AZURE_DUMP_FETCH_TARGET_DIRECTORY / target_directory: Optional, base directory
      for downloads (default: current directory)
    - AZURE_DUMP_FETCH_RG_SUFFIX / resource_group_suffix: Suffix of eligible
      resource group names (default: -rg)
    - AZURE_DUMP_FETCH_CONTAINER_LIMIT / container_limit: Number of recent
      containers to offer (default: 10)
    - AZURE_DUMP_FETCH_AZ_PATH / az_path: Azure CLI executable (default: az)
    """
    try:
        config = load_config()
        settings = load_settings(config)
        presets = load_presets(config)
        controller = DownloadController(settings, presets)
        controller.run(preset)
    except OperatorError as e:
        logging.error('%s', e.message)
        sys.exit(e.exit_code)
    except KeyboardInterrupt:
        logging.error('Interrupted, any partially downloaded files were left in place')
        sys.exit(1)


if __name__ == '__main__':
    main()
