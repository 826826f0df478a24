"""HTTP client for the CloudHub API and debounced auto-sync helpers."""

from cloudhub.client.api_client import CloudHubAPIError, CloudHubClient
from cloudhub.client.autosync import AutoSync, SyncSession

__all__ = [
    "AutoSync",
    "CloudHubAPIError",
    "CloudHubClient",
    "SyncSession",
]
