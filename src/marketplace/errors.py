"""Typed failures raised by marketplace operations.

Malformed input is reported with ``protean.exceptions.ValidationError`` like
everywhere else in the domain layer. The errors below cover the remaining
cases, each carrying the HTTP status the API boundary answers with.
"""


class MarketplaceError(Exception):
    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InsufficientBalance(MarketplaceError):
    """A withdrawal asked for more than the shop's available balance."""

    status_code = 400


class Unauthorized(MarketplaceError):
    """The acting user, seller or admin has no rights over the resource."""

    status_code = 403


class NotFound(MarketplaceError):
    status_code = 404


class OrderNotFound(NotFound):
    pass


class SellerNotFound(NotFound):
    pass


class WithdrawNotFound(NotFound):
    pass


class ProductNotFound(NotFound):
    pass


class UpstreamFailure(MarketplaceError):
    """Mail, media store or payment gateway call failed."""

    status_code = 500
