from typing import Optional


class ProxyError(Exception):
    """Base class for failures that map to an `{error: ...}` response."""
    status_code = 500
    default_message = "Failed to process image"

    def __init__(self, message: Optional[str] = None, detail: Optional[str] = None):
        self.message = message or self.default_message
        # Server-side diagnostics only, never returned to the caller
        self.detail = detail
        super().__init__(self.message)


class InputError(ProxyError):
    """The request carried no usable image."""
    status_code = 400
    default_message = "No image data provided"


class ConfigurationError(ProxyError):
    """The deployment is missing the upstream credential."""
    status_code = 500
    default_message = "OPENAI_API_KEY is not configured. Please set it in your environment."


class UpstreamError(ProxyError):
    """Every configured model call failed."""
    status_code = 500
    default_message = "The AI service is temporarily unavailable. Please try again in a few minutes."


class ParseError(ProxyError):
    """The model answered but no JSON object could be recovered."""
    status_code = 500
    default_message = "Failed to parse AI response - invalid format"


class UploadError(ProxyError):
    """A multipart upload was rejected before reaching the model."""
    status_code = 400
    default_message = "Invalid image upload"

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        if status_code is not None:
            self.status_code = status_code
