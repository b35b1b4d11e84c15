"""Choose the Azure subscription to work in."""

import logging

import click

from azure_dump_fetch.errors import OperatorError
from azure_dump_fetch.models import Scope
from azure_dump_fetch.utils.menu_utils import read_selection


def enabled_scopes_sorted(scopes):
    """Keep Enabled scopes and sort them by display name."""
    return sorted((scope for scope in scopes if scope.is_enabled), key=lambda scope: scope.name)


def select_scope(client, preset_key=None, presets=None, prompt=click.prompt):
    """Resolve the subscription from a preset or an interactive menu.

    Args:
        client: Azure collaborator providing ``list_scopes``
        preset_key (str, optional): Name of a preset from the settings file
        presets (dict, optional): Known presets keyed by name
        prompt (callable): Reads the operator's answer

    Returns:
        tuple: The selected Scope and the preset's resource group name (or None)

    Raises:
        OperatorError: If the preset is unknown or no subscription is enabled
        SelectionError: If the menu answer is invalid
    """
    presets = presets or {}

    if preset_key is not None:
        preset = presets.get(preset_key)
        if preset is None:
            known = ', '.join(sorted(presets)) or '(none configured)'
            click.echo(f'Known presets: {known}')
            raise OperatorError(f"Unknown preset '{preset_key}'", reason='bad argument')
        logging.info('Using preset %s (subscription %s)', preset.key, preset.subscription)
        return Scope(id=preset.subscription, name=preset.key), preset.resource_group

    scopes = enabled_scopes_sorted(client.list_scopes())
    if not scopes:
        raise OperatorError('No enabled subscriptions found for this account')

    index = read_selection('Select a subscription:', [scope.name for scope in scopes], prompt=prompt)
    scope = scopes[index]
    logging.info('Selected subscription %s (%s)', scope.name, scope.id)
    return scope, None
