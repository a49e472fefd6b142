class ClubApiError(Exception):
    """Base exception for the club API."""

    pass


class PaymentGatewayError(ClubApiError):
    """Raised when the payment gateway rejects or fails a request.

    The message carries the gateway's own error text so handlers can
    surface it to the caller verbatim.
    """

    pass


class StorageError(ClubApiError):
    """Raised when an object storage upload fails."""

    pass


class WebhookPayloadError(ClubApiError):
    """Raised when a webhook body cannot be parsed or verified."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class CheckoutError(ClubApiError):
    """Raised when a cart cannot be turned into a checkout session."""

    pass
