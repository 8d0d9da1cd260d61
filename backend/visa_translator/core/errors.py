"""Error taxonomy for the visa translation service.

Only the first two kinds ever reach an HTTP client:

- ConfigurationError: the translation capability is not configured (500)
- InvalidRequestError: bad input shape or unsupported mode (400)

The other two are recovered where they occur:

- TranslationCapabilityError: one sentence failed; the protected sentence is
  used as-is
- VocabularyLoadError: the glossary could not be read; an empty vocabulary is
  used

Messages never include applicant text.
"""


class VisaTranslatorError(Exception):
    """Base exception for all service errors."""


class ConfigurationError(VisaTranslatorError):
    """Raised when the translation capability is not configured."""


class InvalidRequestError(VisaTranslatorError):
    """Raised when a translate request has an invalid shape or mode."""


class TranslationCapabilityError(VisaTranslatorError):
    """Raised when a single sentence translation fails.

    Attributes:
        kind: Short machine-readable failure kind for logs
    """

    def __init__(self, message: str, kind: str = "provider_error"):
        super().__init__(message)
        self.kind = kind


class VocabularyLoadError(VisaTranslatorError):
    """Raised when the glossary data resource cannot be read."""
