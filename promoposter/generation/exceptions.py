from promoposter.errors import AppError


class GenerationServiceError(AppError):
    """Raised when a text or image generation call fails or answers garbage."""

    status_code = 502
    code = "generation_error"


class GenerationNetworkError(GenerationServiceError):
    """Raised when the AI provider call fails due to network/infrastructure issues."""


class PromptError(GenerationServiceError):
    """Raised when no image prompt could be synthesized from a summary."""

    code = "prompt_error"


class PromptTemplateError(AppError):
    """Raised when a bundled prompt template cannot be loaded."""

    status_code = 500
    code = "prompt_template_error"
