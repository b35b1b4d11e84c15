"""Azure control-plane operations backed by the ``az`` command line tool."""

import json
import shutil
import logging
import subprocess

from azure_dump_fetch.errors import AzureCliError, OperatorError
from azure_dump_fetch.models import Container, ResourceGroup, Scope, StorageAccount
from azure_dump_fetch.utils.http_utils import build_blob_url, download_file

INSTALL_HINT = 'https://learn.microsoft.com/cli/azure/install-azure-cli'
SECRET_OPTIONS = ('--sas-token', '--account-key')


def redact_command(cmd):
    """Return ``cmd`` as a string with secret option values masked."""
    redacted = []
    hide_next = False
    for part in cmd:
        redacted.append('***' if hide_next else part)
        hide_next = part in SECRET_OPTIONS
    return ' '.join(redacted)


class AzureCliClient:
    """Client for the Azure operations the download flow needs."""

    def __init__(self, az_path='az'):
        """
        Initialize the client.

        Args:
            az_path (str): Name or path of the Azure CLI executable
        """
        self.az_path = az_path

    def ensure_session(self):
        """Make sure the Azure CLI is installed and logged in.

        Runs ``az login`` interactively when ``az account show`` reports no
        session.

        Raises:
            OperatorError: If the CLI is missing or the login fails
        """
        resolved = shutil.which(self.az_path)
        if not resolved:
            raise OperatorError(
                f"Azure CLI ('{self.az_path}') not found. Install it from {INSTALL_HINT} and try again.",
                reason='missing dependency',
            )
        self.az_path = resolved

        probe = subprocess.run([self.az_path, 'account', 'show', '--output', 'none'],
                               capture_output=True, text=True)
        if probe.returncode == 0:
            logging.info('Using existing Azure CLI session')
            return

        logging.info('No active Azure CLI session, starting az login')
        login = subprocess.run([self.az_path, 'login', '--output', 'none'])
        if login.returncode != 0:
            raise OperatorError("Azure login failed. Run 'az login' yourself and try again.",
                                reason='no session')

    def list_scopes(self):
        """List every subscription visible to the logged-in account.

        Returns:
            list[Scope]: Subscriptions in CLI order, any state
        """
        accounts = self._run_json(['account', 'list', '--all']) or []
        return [Scope(id=a['id'], name=a.get('name', a['id']), state=a.get('state', ''))
                for a in accounts]

    def set_active_scope(self, scope):
        logging.info('Switching Azure CLI to subscription id %s', scope.id)
        self._run(['account', 'set', '--subscription', scope.id])

    def list_resource_groups(self, scope, suffix):
        """List resource groups whose name ends with ``suffix``.

        Returns:
            list[ResourceGroup]: Matching groups in CLI order
        """
        escaped = suffix.replace('\\', '\\\\').replace("'", "\\'")
        query = f"[?ends_with(name, '{escaped}')].name"
        names = self._run_json(['group', 'list', '--subscription', scope.id, '--query', query]) or []
        return [ResourceGroup(name) for name in names]

    def list_storage_keys(self, scope, resource_group):
        """Find the storage account in a resource group and its first access key.

        Returns:
            StorageAccount: Account name and key

        Raises:
            OperatorError: If the resource group holds no storage account or the
                account has no access key
        """
        names = self._run_json([
            'storage', 'account', 'list',
            '--subscription', scope.id,
            '--resource-group', resource_group.name,
            '--query', '[].name',
        ]) or []
        if not names:
            raise OperatorError(f'No storage account found in resource group {resource_group.name}')
        if len(names) > 1:
            logging.warning('Resource group %s has %d storage accounts, using %s',
                            resource_group.name, len(names), names[0])

        key = self._run_json([
            'storage', 'account', 'keys', 'list',
            '--subscription', scope.id,
            '--resource-group', resource_group.name,
            '--account-name', names[0],
            '--query', '[0].value',
        ])
        if not key:
            raise OperatorError(f'No access key for storage account {names[0]}')
        return StorageAccount(name=names[0], key=key)

    def generate_sas(self, account, expiry, permissions, services, resource_types, https_only=True):
        """Mint an account SAS token.

        Args:
            account (StorageAccount): Account to sign for
            expiry (str): UTC expiry formatted as ``%Y-%m-%dT%H:%M:%SZ``
            permissions (str): Permission letters, e.g. ``rwdlc``
            services (str): Service letters, e.g. ``b`` for blob
            resource_types (str): Resource type letters, e.g. ``sco``
            https_only (bool): Restrict the token to HTTPS

        Returns:
            str: The SAS token without a leading ``?``
        """
        args = [
            'storage', 'account', 'generate-sas',
            '--account-name', account.name,
            '--account-key', account.key,
            '--expiry', expiry,
            '--permissions', permissions,
            '--services', services,
            '--resource-types', resource_types,
        ]
        if https_only:
            args.append('--https-only')
        return self._run_json(args).lstrip('?')

    def list_containers(self, account, token, limit):
        """List the ``limit`` most recently modified containers, newest first."""
        query = f'reverse(sort_by(@, &properties.lastModified))[:{limit}].name'
        names = self._run_json([
            'storage', 'container', 'list',
            '--account-name', account.name,
            '--sas-token', token.value,
            '--query', query,
        ]) or []
        return [Container(name) for name in names]

    def download_object(self, account, container, blob_path, destination, token):
        """Download one blob to ``destination`` over HTTPS."""
        url = build_blob_url(account.name, container.name, blob_path, token.value)
        return download_file(url, destination, f'{container.name}/{blob_path}')

    def download_batch(self, account, container, pattern, destination, token):
        """Download every blob matching ``pattern`` (all blobs when None) below ``destination``."""
        args = [
            'storage', 'blob', 'download-batch',
            '--account-name', account.name,
            '--source', container.name,
            '--destination', destination,
            '--sas-token', token.value,
        ]
        if pattern:
            args.extend(['--pattern', pattern])
        args.extend(['--output', 'none'])
        logging.info('Downloading %s from container %s to %s',
                     pattern or 'all blobs', container.name, destination)
        self._run(args)

    def _run_json(self, args):
        result = self._run(args + ['--output', 'json'])
        return json.loads(result.stdout) if result.stdout.strip() else None

    def _run(self, args):
        cmd = [self.az_path] + args
        logging.debug('Running %s', redact_command(cmd))
        result = subprocess.run(cmd, capture_output=True, text=True)
        if result.returncode != 0:
            raise AzureCliError(redact_command(cmd), result.returncode, result.stderr.strip())
        return result
