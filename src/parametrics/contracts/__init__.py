"""Contracts between the engine and its collaborators."""

from parametrics.contracts.protocols import SettingsStoreProtocol

__all__ = ["SettingsStoreProtocol"]
