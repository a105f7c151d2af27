"""
Data models for the contact email domain.

These type-safe data structures define clear contracts between components.
"""

import base64
import binascii
import json
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Optional

from .errors import MalformedRequestError

CHARSET = 'UTF-8'


def decode_body(body: Optional[str], is_base64_encoded: bool = False) -> str:
    """
    Return the request body as text, decoding API Gateway base64 bodies.

    Raises:
        MalformedRequestError: If a base64 body is not valid base64 or UTF-8
    """
    if not body or not is_base64_encoded:
        return body or ''

    try:
        raw = base64.b64decode(body, validate=True)
    except binascii.Error as e:
        raise MalformedRequestError(f"request body is not valid base64: {e}") from e

    try:
        return raw.decode('utf-8')
    except UnicodeDecodeError as e:
        raise MalformedRequestError(f"request body is not valid UTF-8: {e}") from e


@dataclass(frozen=True)
class ContactRequest:
    """
    Contact form submission parsed from the request body.

    Attributes:
        email: Submitter's address (used as Reply-To)
        subject: Email subject line
        message: Email message text
        app_version: Client tag, e.g. "ios 1.2.3+4"
    """
    email: str
    subject: str
    message: str
    app_version: str

    @classmethod
    def from_json(cls, body: Optional[str]) -> 'ContactRequest':
        """
        Deserialize a JSON request body.

        Missing or null fields read as empty strings and are left for the
        validators to reject.

        Args:
            body: Raw JSON text from the HTTP request

        Returns:
            ContactRequest: The parsed submission

        Raises:
            MalformedRequestError: If the body is not a JSON object of strings
        """
        try:
            data = json.loads(body or '')
        except json.JSONDecodeError as e:
            raise MalformedRequestError(str(e)) from e

        if not isinstance(data, dict):
            raise MalformedRequestError(
                f"request body must be a JSON object, got {type(data).__name__}"
            )

        fields = {}
        for key in ('email', 'subject', 'message', 'app_version'):
            value = data.get(key)
            if value is None:
                value = ''
            elif not isinstance(value, str):
                raise MalformedRequestError(
                    f"field '{key}' must be a string, got {type(value).__name__}"
                )
            fields[key] = value

        return cls(**fields)


@dataclass(frozen=True)
class ValidationResult:
    """
    Outcome of validating one field.

    Attributes:
        field: Field kind that was checked
        valid: Whether the value passed
        reason: Failure message (None when valid)
    """
    field: str
    valid: bool
    reason: Optional[str] = None

    @classmethod
    def ok(cls, field: str) -> 'ValidationResult':
        return cls(field=field, valid=True)

    @classmethod
    def invalid(cls, field: str, reason: str) -> 'ValidationResult':
        return cls(field=field, valid=False, reason=reason)

    def __bool__(self) -> bool:
        return self.valid


@dataclass(frozen=True)
class OutboundMessage:
    """
    Email ready to hand to SES.

    Attributes:
        sender: Source address
        recipients: Destination addresses
        reply_to: Address replies should go to
        subject: Subject text
        body: Plain text body
        charset: Character set for subject and body
    """
    sender: str
    recipients: FrozenSet[str]
    reply_to: str
    subject: str
    body: str
    charset: str = CHARSET

    def to_ses_request(self) -> Dict[str, Any]:
        """
        Render keyword arguments for the SES SendEmail API.

        Returns:
            Dict suitable for ``ses_client.send_email(**request)``
        """
        return {
            'Source': self.sender,
            'Destination': {
                'ToAddresses': sorted(self.recipients),
            },
            'ReplyToAddresses': [self.reply_to],
            'Message': {
                'Subject': {
                    'Charset': self.charset,
                    'Data': self.subject,
                },
                'Body': {
                    'Text': {
                        'Charset': self.charset,
                        'Data': self.body,
                    },
                },
            },
        }


@dataclass
class ContactResult:
    """
    Result of processing one contact form request.

    Attributes:
        success: Whether the email was sent
        status_code: HTTP status to return
        body: Response body (JSON on success, plain error text on failure)
        error_kind: Failure category (None on success)
        message_id: SES message id (None unless sent)
    """
    success: bool
    status_code: int
    body: str
    error_kind: Optional[str] = None
    message_id: Optional[str] = None

    def __repr__(self) -> str:
        """Human-readable representation for logging."""
        if self.success:
            return f"ContactResult(success=True, message_id={self.message_id})"
        else:
            return f"ContactResult(success=False, kind={self.error_kind}, error={self.body})"
