class FigError(Exception):
    """Base class for every failure a fig function can raise."""

    pass


class InvalidInputError(FigError):
    """Raised when the request is missing a field or the code is too long."""

    pass


class IdentityResolutionError(FigError):
    """Raised when the caller cannot be matched to a user."""

    pass


class QuotaExceededError(FigError):
    """Raised when the user has used up the monthly quota of their plan."""

    pass


class UpstreamError(FigError):
    """
    Raised when the completion API fails or returns no usable text.
    The model call is never retried.
    """

    pass
