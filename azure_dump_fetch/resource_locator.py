"""Find the resource group holding the storage account."""

import logging

import click

from azure_dump_fetch.errors import OperatorError
from azure_dump_fetch.models import ResourceGroup
from azure_dump_fetch.utils.menu_utils import read_selection


def locate_resource_group(client, scope, suffix, hint=None, prompt=click.prompt):
    """Return the one resource group to download from.

    A preset's resource group is used as-is. Otherwise groups ending with
    ``suffix`` are listed: a single match is picked automatically, several
    matches are offered in a menu.

    Raises:
        OperatorError: If no resource group matches
        SelectionError: If the menu answer is invalid
    """
    if hint:
        logging.info('Using preset resource group %s', hint)
        return ResourceGroup(hint)

    groups = client.list_resource_groups(scope, suffix)
    if not groups:
        raise OperatorError(f"No resource groups ending with '{suffix}' found in subscription {scope.name}")

    if len(groups) == 1:
        logging.info('Found one resource group, using %s', groups[0].name)
        return groups[0]

    index = read_selection('Select a resource group:', [group.name for group in groups], prompt=prompt)
    group = groups[index]
    logging.info('Selected resource group %s', group.name)
    return group
