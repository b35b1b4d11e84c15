"""Azure collaborators used by the download flow."""

from azure_dump_fetch.azure.cli import AzureCliClient
