"""Client-side wrappers for the Elix API: HTTP client, fallback-aware
dashboard loader and the realtime poller."""

from src.client.api import ElixAPIError, ElixClient
from src.client.dashboard import DashboardDataService, DashboardSnapshot, RealtimeSnapshot
from src.client.poller import RealtimePoller

__all__ = [
    "DashboardDataService",
    "DashboardSnapshot",
    "ElixAPIError",
    "ElixClient",
    "RealtimePoller",
    "RealtimeSnapshot",
]
