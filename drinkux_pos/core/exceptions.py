"""
POS integration exceptions.

Two propagation policies coexist in this package. Adapter preconditions,
unsupported providers, unknown orders and unresolvable locations are raised
as the exceptions below. The integration manager catches everything on the
menu-sync, order-submission and connection-test paths and reports the
exception message in a result object instead.
"""

from typing import Any, Optional


class POSError(Exception):
    """Base exception for POS integration errors."""

    def __init__(self, message: str, provider: Optional[str] = None) -> None:
        self.message = message
        self.provider = provider
        super().__init__(message)


class MissingCredentialsError(POSError):
    """Adapter was built without the credentials it needs."""


class MissingConfigError(POSError):
    """Adapter was built without a configuration object."""


class UnsupportedProviderError(POSError):
    """No adapter is registered for the requested provider."""

    def __init__(self, provider: str, supported: list) -> None:
        self.supported = list(supported)
        super().__init__(
            f"Unsupported POS provider: {provider}. "
            f"Supported providers: {', '.join(self.supported)}",
            provider=provider,
        )


class LocationRequiredError(POSError):
    """Neither the caller nor the integration config supplied a location."""


class POSConnectionFailedError(POSError):
    """A connection test failed while (re)configuring an integration."""


class IntegrationNotFoundError(POSError):
    """No integration record exists for the business."""


class POSAPIError(POSError):
    """API request to POS provider failed."""

    def __init__(
        self,
        message: str,
        provider: Optional[str] = None,
        status_code: Optional[int] = None,
        payload: Any = None,
    ) -> None:
        super().__init__(message, provider)
        self.status_code = status_code
        self.payload = payload


class POSNotFoundError(POSAPIError):
    """The vendor has no such object (location, order)."""
