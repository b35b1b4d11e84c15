"""
Utility functions for azure-dump-fetch.
"""

from azure_dump_fetch.utils.file_utils import prepare_destination, sanitize_folder_name
from azure_dump_fetch.utils.http_utils import build_blob_url, download_file
from azure_dump_fetch.utils.menu_utils import parse_selection, read_selection, render_menu
