"""Main controller for azure-dump-fetch download runs."""

import logging

import click

from azure_dump_fetch.azure.cli import AzureCliClient
from azure_dump_fetch.container_picker import pick_container
from azure_dump_fetch.credentials import mint_access_token
from azure_dump_fetch.resource_locator import locate_resource_group
from azure_dump_fetch.scope_selector import select_scope
from azure_dump_fetch.transfer import select_download_mode, transfer
from azure_dump_fetch.utils.file_utils import prepare_destination


class DownloadController:
    """Controller that walks the operator from login to a local copy of a container."""

    def __init__(self, settings, presets=None, client=None, prompt=click.prompt):
        """
        Initialize download controller.

        Args:
            settings (Settings): Run settings from azure_dump_fetch.config
            presets (dict, optional): Known presets keyed by name
            client (optional): Azure collaborator, an AzureCliClient by default
            prompt (callable): Reads operator answers, click.prompt by default
        """
        self.settings = settings
        self.presets = presets or {}
        self.client = client or AzureCliClient(settings.az_path)
        self.prompt = prompt

    def run(self, preset_key=None):
        """
        Run every stage in order.

        Args:
            preset_key (str, optional): Preset to use instead of the subscription menu

        Returns:
            str: Folder the container was downloaded into
        """
        self.client.ensure_session()

        scope, resource_group_hint = select_scope(
            self.client, preset_key, self.presets, prompt=self.prompt
        )
        self.client.set_active_scope(scope)

        resource_group = locate_resource_group(
            self.client, scope, self.settings.resource_group_suffix,
            hint=resource_group_hint, prompt=self.prompt
        )

        account, token = mint_access_token(self.client, scope, resource_group)

        container = pick_container(
            self.client, account, token, limit=self.settings.container_limit, prompt=self.prompt
        )
        mode = select_download_mode(prompt=self.prompt)

        destination = prepare_destination(container.name, self.settings.target_directory)
        logging.info('Download folder: %s', destination)

        transfer(self.client, account, token, container, mode, destination)
        logging.info('Download of %s completed successfully', container.name)
        return destination
