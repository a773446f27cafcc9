"""
Custom exception classes for django-empresa-branding.

These exceptions describe the ways tenant resolution can fail. The
resolver converts them into state on the branding context; they only
escape to callers from the low-level lookup helpers.
"""


class BrandingException(Exception):
    """
    Base exception for all tenant branding errors.

    All custom exceptions in this library inherit from this class,
    allowing catch-all handling when needed.
    """

    def __init__(self, message: str = None, tenant=None):
        """
        Initialize the exception.

        Args:
            message: Human-readable error message
            tenant: The tenant involved (if available)
        """
        self.message = message or self.__class__.__doc__.strip().splitlines()[0]
        self.tenant = tenant
        super().__init__(self.message)


class TenantNotFoundError(BrandingException):
    """
    Raised when no active tenant matches the requested identifier.

    During initial resolution this is not an error at all (the system
    default branding is used). It only surfaces when a caller asked
    for a specific tenant by slug.
    """

    def __init__(self, message: str = None, identifier: str = None, **kwargs):
        """
        Initialize the exception.

        Args:
            message: Human-readable error message
            identifier: The slug or domain that was not found
        """
        self.identifier = identifier
        if message is None and identifier:
            message = f"Empresa não encontrada: '{identifier}'"
        super().__init__(message, **kwargs)


class GatewayError(BrandingException):
    """
    Raised when the tenant lookup itself fails.

    Covers network, authentication and malformed query failures of the
    remote data gateway, as opposed to a lookup that succeeds with no rows.
    """

    def __init__(self, message: str = None, table: str = None, filters: dict = None, **kwargs):
        self.table = table
        self.filters = dict(filters or {})
        super().__init__(message, **kwargs)


class GatewayTimeoutError(GatewayError):
    """
    Raised when a tenant lookup does not complete within LOOKUP_TIMEOUT.
    """

    def __init__(self, message: str = None, timeout: float = None, **kwargs):
        self.timeout = timeout
        if message is None and timeout is not None:
            message = f"Tenant lookup timed out after {timeout}s"
        super().__init__(message, **kwargs)


class InvalidEnvironmentError(BrandingException):
    """
    Raised when an execution environment carries no usable hostname.
    """
