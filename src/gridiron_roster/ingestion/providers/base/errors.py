from __future__ import annotations


class ProviderError(RuntimeError):
    """Base exception for provider-related failures."""


class ProviderRequestError(ProviderError):
    """HTTP/network/transport layer failures (timeouts, connection errors, non-2xx, etc.)."""


class ProviderRateLimited(ProviderRequestError):
    """Provider throttled the request (e.g., HTTP 429)."""


class UpstreamFetchError(ProviderError):
    """The primary stats provider could not be read. Never cached."""


# Name used by the stats client and its callers.
StatsFetchError = UpstreamFetchError


class EnrichmentLookupFailure(ProviderError):
    """A secondary-provider lookup failed for a single player name."""

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(f"lookup failed for {name!r}: {reason}")
        self.name = name
        self.reason = reason
