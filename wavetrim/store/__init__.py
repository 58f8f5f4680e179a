"""Mutable editor state: region selection and persisted settings."""

from .region_store import Region, RegionOrigin, RegionStore
from .settings_store import AppSettings, SettingsStore

__all__ = ["AppSettings", "Region", "RegionOrigin", "RegionStore", "SettingsStore"]
