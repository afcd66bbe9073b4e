"""Provider exceptions."""


class ProviderError(RuntimeError):
    """Raised when a provider operation fails."""


class ProviderUnavailableError(ProviderError):
    """Raised when a provider backend cannot be used at all."""
