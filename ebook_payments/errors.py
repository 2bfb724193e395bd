class PaymentServiceError(Exception):
    """Base for failures that map to a caller-facing HTTP status."""

    status_code = 500
    detail = "Internal server error"

    def __init__(self, detail: str = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class InvalidRequest(PaymentServiceError):
    status_code = 400
    detail = "Invalid request"


class PaymentIncomplete(PaymentServiceError):
    status_code = 400
    detail = "Payment not successful"


class PaymentNotCompleted(PaymentServiceError):
    status_code = 403
    detail = "Payment not completed"


class ResourceNotFound(PaymentServiceError):
    status_code = 404
    detail = "eBook not found"


class UpstreamError(PaymentServiceError):
    # Stripe details stay in the server logs
    status_code = 500
    detail = "An error occurred while processing your payment."


class TransferError(PaymentServiceError):
    status_code = 500
    detail = "Error downloading file"
