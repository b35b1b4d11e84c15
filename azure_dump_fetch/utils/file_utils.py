"""Local destination folders for downloaded blobs."""

import os
import re

from azure_dump_fetch.errors import OperatorError


def sanitize_folder_name(name):
    """Replace characters that are not allowed in a local folder name."""
    folder = re.sub(r'[/\\:*?"<>|]', '_', name)
    return folder.strip('_. ')


def prepare_destination(container_name, target_directory=None):
    """Create the folder a container is downloaded into.

    Args:
        container_name (str): Name of the selected container
        target_directory (str, optional): Base directory. Defaults to the
            current working directory.

    Returns:
        str: Absolute path of the created (or already existing) folder
    """
    folder_name = sanitize_folder_name(container_name)
    if not folder_name:
        raise OperatorError(f'Cannot build a folder name from container {container_name!r}')

    if target_directory:
        destination = os.path.join(os.path.abspath(os.path.expanduser(target_directory)), folder_name)
    else:
        destination = os.path.abspath(folder_name)

    os.makedirs(destination, exist_ok=True)
    return destination
