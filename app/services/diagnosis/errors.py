"""
Error taxonomy for image diagnosis.

- ImageValidationError: rejected locally before the model is called; message is safe to show.
- AnalysisFailedError: anything after validation; the caller only ever sees the generic message.
"""

ANALYSIS_FAILED_MESSAGE = "Failed to analyze image and generate structured response."


class DiagnosisError(Exception):
    """Base class for diagnosis errors"""
    status_code = 500


class ConfigurationError(DiagnosisError):
    """Service cannot be built (missing credential, unknown profile, schema drift)"""


class ImageValidationError(DiagnosisError):
    status_code = 400


class FileTooLargeError(ImageValidationError):
    status_code = 413


class UnsupportedImageTypeError(ImageValidationError):
    status_code = 415


class AnalysisFailedError(DiagnosisError):
    """Generic failure; the underlying reason is kept in ``reason`` and never shown to the caller."""
    status_code = 500

    def __init__(self, reason: str = ""):
        super().__init__(ANALYSIS_FAILED_MESSAGE)
        self.reason = reason


class UpstreamError(AnalysisFailedError):
    """The model invocation itself failed (network, auth, quota, timeout)"""


class ResponseFormatError(AnalysisFailedError):
    """The model answered, but not with a usable diagnosis"""

    def __init__(self, reason: str = "", is_syntax_error: bool = False):
        super().__init__(reason)
        self.is_syntax_error = is_syntax_error
