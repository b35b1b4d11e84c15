"""List and choose a blob container."""

import logging

import click

from azure_dump_fetch.errors import OperatorError
from azure_dump_fetch.utils.menu_utils import read_selection


def sort_containers(containers):
    """Sort containers descending by name.

    Only the page that was fetched is sorted, so this is not the globally
    newest set in name order.
    """
    return sorted(containers, key=lambda container: container.name, reverse=True)


def pick_container(client, account, token, limit=10, prompt=click.prompt):
    """Fetch the most recent containers and let the operator choose one.

    Raises:
        OperatorError: If the storage account has no containers
        SelectionError: If the menu answer is invalid
    """
    containers = client.list_containers(account, token, limit)
    if not containers:
        raise OperatorError(f'No containers found in storage account {account.name}')

    containers = sort_containers(containers)
    index = read_selection('Select a container:', [c.name for c in containers], prompt=prompt)
    container = containers[index]
    logging.info('Selected container %s', container.name)
    return container
