from promoposter.errors import AppError


class ExtractionError(AppError):
    """Raised when a source document cannot be read or parsed."""

    status_code = 400
    code = "extraction_error"
