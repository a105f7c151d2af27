"""
Exception types for the contact email pipeline.

Expected failures subclass ContactError and carry a ``kind`` used to tag the
HTTP response. UnknownFieldError is not a ContactError: it signals a wiring
bug and propagates instead of becoming a 400 response.
"""


class ContactError(Exception):
    """Base class for failures reported back to the caller as a 400."""
    kind = 'contact'


class MalformedRequestError(ContactError):
    """Raised when the request body is not a JSON object of strings."""
    kind = 'malformed_request'


class ConfigurationError(ContactError):
    """Raised when the recipient address cannot be resolved."""
    kind = 'configuration'


class ParameterLookupError(ConfigurationError):
    """Raised when the Parameter Store call itself fails."""
    pass


class MissingParameterError(ConfigurationError):
    """Raised when the parameter exists but holds an empty value."""
    pass


class EmailSendError(ContactError):
    """Raised when SES rejects or fails to send the message."""
    kind = 'send'


class InvalidAppVersionError(ValueError):
    """Raised when a client tag does not match the app version grammar."""
    pass


class UnknownFieldError(Exception):
    """Raised when a validator is requested for a field kind that does not exist."""
    pass
