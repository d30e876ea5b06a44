from promoposter.errors import AppError


class DispatchError(AppError):
    """Raised or reported when the messaging gateway rejects a dispatch."""

    status_code = 500
    code = "dispatch_error"


class DispatchValidationError(DispatchError):
    """Raised when a dispatch request is incomplete; no gateway call is made."""

    status_code = 400
    code = "invalid_request"
