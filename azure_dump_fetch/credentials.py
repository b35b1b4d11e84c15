"""Short-lived SAS credentials for the storage account."""

import logging
from datetime import datetime, timedelta, timezone

from azure_dump_fetch.models import AccessToken

TOKEN_LIFETIME = timedelta(days=1)
EXPIRY_FORMAT = '%Y-%m-%dT%H:%M:%SZ'
SAS_PERMISSIONS = 'rwdlc'
SAS_SERVICES = 'b'
SAS_RESOURCE_TYPES = 'sco'


def token_expiry(now=None):
    """Return the moment a token minted at ``now`` expires (UTC)."""
    now = now or datetime.now(timezone.utc)
    return now + TOKEN_LIFETIME


def mint_access_token(client, scope, resource_group, now=None):
    """Mint a blob SAS token valid until the same time tomorrow.

    Args:
        client: Azure collaborator providing ``list_storage_keys`` and ``generate_sas``
        scope (Scope): Selected subscription
        resource_group (ResourceGroup): Group holding the storage account
        now (datetime, optional): Mint time, defaults to the current UTC time

    Returns:
        tuple: The StorageAccount and its AccessToken
    """
    account = client.list_storage_keys(scope, resource_group)
    expiry = token_expiry(now)
    value = client.generate_sas(
        account,
        expiry=expiry.strftime(EXPIRY_FORMAT),
        permissions=SAS_PERMISSIONS,
        services=SAS_SERVICES,
        resource_types=SAS_RESOURCE_TYPES,
        https_only=True,
    )
    logging.info('Minted SAS token for storage account %s, valid until %s',
                 account.name, expiry.strftime('%Y-%m-%d %H:%M:%S %Z'))
    return account, AccessToken(value=value, expiry=expiry)
