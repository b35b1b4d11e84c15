import sys
import os
import fnmatch

import pytest

project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
# Add project root to resolve main.py and the 'azure_dump_fetch' package
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from azure_dump_fetch.config import Settings
from azure_dump_fetch.models import Container, ResourceGroup, Scope, StorageAccount


class FakeAzureClient:
    """In-memory stand-in for AzureCliClient."""

    def __init__(self, scopes=None, groups=None, containers=None, blobs=None):
        self.scopes = scopes if scopes is not None else [Scope('sub-1', 'Production')]
        self.groups = groups if groups is not None else [ResourceGroup('app-rg')]
        self.containers = containers if containers is not None else [Container('backup-2024-01-01')]
        self.blobs = blobs if blobs is not None else {
            'dump.sql': b'CREATE TABLE t (id int);',
            'static/css/site.css': b'body {}',
            'static/logo.png': b'\x89PNG',
            'media/upload.jpg': b'\xff\xd8',
        }
        self.account = StorageAccount('appstorage', 'secret-key')
        self.calls = []

    def ensure_session(self):
        self.calls.append(('ensure_session',))

    def list_scopes(self):
        self.calls.append(('list_scopes',))
        return list(self.scopes)

    def set_active_scope(self, scope):
        self.calls.append(('set_active_scope', scope))

    def list_resource_groups(self, scope, suffix):
        self.calls.append(('list_resource_groups', scope, suffix))
        return list(self.groups)

    def list_storage_keys(self, scope, resource_group):
        self.calls.append(('list_storage_keys', scope, resource_group))
        return self.account

    def generate_sas(self, account, expiry, permissions, services, resource_types, https_only=True):
        self.calls.append(('generate_sas', account, expiry, permissions, services, resource_types, https_only))
        return 'sv=2022-11-02&sig=abc'

    def list_containers(self, account, token, limit):
        self.calls.append(('list_containers', account, token, limit))
        return list(self.containers)

    def download_object(self, account, container, blob_path, destination, token):
        self.calls.append(('download_object', container, blob_path, destination))
        with open(destination, 'wb') as f:
            f.write(self.blobs[blob_path])
        return destination

    def download_batch(self, account, container, pattern, destination, token):
        self.calls.append(('download_batch', container, pattern, destination))
        for path, data in self.blobs.items():
            if pattern and not fnmatch.fnmatch(path, pattern):
                continue
            target = os.path.join(destination, *path.split('/'))
            os.makedirs(os.path.dirname(target), exist_ok=True)
            with open(target, 'wb') as f:
                f.write(data)

    def called(self, name):
        return [call for call in self.calls if call[0] == name]


class ScriptedPrompt:
    """Prompt replacement that returns prepared answers in order."""

    def __init__(self, *answers):
        self.answers = list(answers)
        self.asked = 0

    def __call__(self, text, default='', show_default=False):
        self.asked += 1
        if not self.answers:
            raise AssertionError(f'Unexpected prompt: {text}')
        return self.answers.pop(0)


@pytest.fixture
def fake_client():
    return FakeAzureClient()


@pytest.fixture
def settings(tmp_path):
    return Settings(
        target_directory=str(tmp_path / 'downloads'),
        resource_group_suffix='-rg',
        container_limit=10,
        az_path='az',
    )


def list_tree(root):
    """Return every file below ``root`` as sorted forward-slash relative paths."""
    found = []
    for dirpath, _, filenames in os.walk(root):
        for filename in filenames:
            found.append(os.path.relpath(os.path.join(dirpath, filename), root).replace(os.sep, '/'))
    return sorted(found)
