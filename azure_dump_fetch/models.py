"""Snapshot values passed between the download stages."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from azure_dump_fetch.errors import SelectionError

ENABLED_STATE = 'Enabled'


@dataclass(frozen=True)
class Scope:
    """An Azure subscription as reported by ``az account list``."""

    id: str
    name: str
    state: str = ENABLED_STATE

    @property
    def is_enabled(self):
        return self.state == ENABLED_STATE


@dataclass(frozen=True)
class ResourceGroup:
    name: str


@dataclass(frozen=True)
class StorageAccount:
    name: str
    key: str

    def __repr__(self):
        return f"StorageAccount(name={self.name!r})"


@dataclass(frozen=True)
class AccessToken:
    """A SAS token and the moment it stops being valid."""

    value: str
    expiry: datetime

    def __repr__(self):
        return f"AccessToken(expiry={self.expiry!r})"


@dataclass(frozen=True)
class Container:
    name: str


@dataclass(frozen=True)
class Preset:
    """A named subscription (and optional resource group) from the settings file."""

    key: str
    subscription: str
    resource_group: Optional[str] = None


class DownloadMode(Enum):
    SQL_DUMP_ONLY = 0
    FILES_ONLY = 1
    BOTH = 2

    @property
    def label(self):
        return _MODE_LABELS[self]

    @classmethod
    def from_index(cls, index):
        """Map a menu index to a mode.

        Raises:
            SelectionError: If ``index`` is not one of the defined modes.
        """
        for mode in cls:
            if mode.value == index:
                return mode
        raise SelectionError(f'Invalid selection: {index} is not a download option')


_MODE_LABELS = {
    DownloadMode.SQL_DUMP_ONLY: 'SQL dump only (dump.sql)',
    DownloadMode.FILES_ONLY: 'Files only (static/)',
    DownloadMode.BOTH: 'Both (entire container)',
}
