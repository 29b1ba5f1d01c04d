"""Exception types raised at the collaborator boundary."""

from typing import Optional

MISSING_CONFIG_MESSAGE = (
    "Missing Kontent.ai Project ID configuration. "
    "Set KONTENT_PROJECT_ID or KONTENT_ENVIRONMENT_ID and run 'config' to verify settings."
)


class SlugCheckError(Exception):
    """Base exception for slug checking failures."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class ConfigurationError(SlugCheckError):
    """Raised when the content source identifier is missing."""

    def __init__(self, message: str = MISSING_CONFIG_MESSAGE):
        super().__init__(message)


class FetchError(SlugCheckError):
    """Raised when the Delivery API call fails (network, permissions, bad query)."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        language: Optional[str] = None,
    ):
        self.status_code = status_code
        self.language = language
        super().__init__(message)
