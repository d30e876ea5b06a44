from promoposter.errors import AppError


class AcquisitionError(AppError):
    """Raised when any image of a batch cannot be downloaded or re-encoded."""

    status_code = 502
    code = "acquisition_error"


class CompositionError(AppError):
    """Raised when a background cannot be decoded or the poster cannot be rendered."""

    status_code = 500
    code = "composition_error"


class StorageError(AppError):
    """Raised when a generated artifact cannot be written."""

    status_code = 500
    code = "storage_error"
