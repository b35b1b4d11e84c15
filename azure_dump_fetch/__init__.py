"""
Interactive download of SQL dumps and static files from Azure Blob Storage.
"""

from azure_dump_fetch.download_controller import DownloadController
from azure_dump_fetch.errors import AzureCliError, OperatorError, SelectionError

__version__ = '1.0.0'
