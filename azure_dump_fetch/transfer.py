"""Copy the chosen blobs into the local destination folder."""

import os
import logging

import click

from azure_dump_fetch.errors import SelectionError
from azure_dump_fetch.models import DownloadMode
from azure_dump_fetch.utils.menu_utils import read_selection

SQL_DUMP_BLOB = 'dump.sql'
STATIC_FOLDER = 'static'
STATIC_PATTERN = 'static/*'


def select_download_mode(prompt=click.prompt):
    """Ask what to download. The menu is numbered from 0."""
    modes = list(DownloadMode)
    index = read_selection('What do you want to download?', [m.label for m in modes], base=0, prompt=prompt)
    return DownloadMode.from_index(index)


def transfer(client, account, token, container, mode, destination):
    """Download the objects selected by ``mode`` into ``destination``.

    Nothing is cleaned up if a download fails halfway.

    Raises:
        SelectionError: If ``mode`` is not a DownloadMode
    """
    if mode is DownloadMode.SQL_DUMP_ONLY:
        client.download_object(account, container, SQL_DUMP_BLOB,
                               os.path.join(destination, SQL_DUMP_BLOB), token)
    elif mode is DownloadMode.FILES_ONLY:
        os.makedirs(os.path.join(destination, STATIC_FOLDER), exist_ok=True)
        client.download_batch(account, container, STATIC_PATTERN, destination, token)
    elif mode is DownloadMode.BOTH:
        client.download_batch(account, container, None, destination, token)
    else:
        raise SelectionError(f'Invalid selection: {mode!r} is not a download option')

    logging.info('Downloaded %s from container %s into %s', mode.label, container.name, destination)
