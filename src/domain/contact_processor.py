"""
Contact form pipeline - core business logic.

This module handles one contact form submission end to end:
1. Parse the JSON request body
2. Validate email, subject, message and app version (first failure wins)
3. Resolve the recipient address from Parameter Store
4. Assemble the outbound email
5. Send it through SES
6. Return result (success or failure)

Expected failures are returned as ContactResult with success=False and a
400 status. Programming faults (e.g. UnknownFieldError) propagate.
"""

import json
import logging
from typing import Any, Optional

from .errors import ContactError
from .message_builder import assemble
from .models import ContactRequest, ContactResult, ValidationResult, decode_body
from . import validators
from services import mailer
from services import parameters

logger = logging.getLogger(__name__)

SUCCESS_BODY = json.dumps({'message': 'message sent successfully'}, separators=(',', ':'))


class ContactProcessor:
    """
    Runs the contact email pipeline for one request at a time.

    Clients are optional; when omitted the shared process clients from
    services.aws are used on first call.
    """

    def __init__(
        self,
        ssm_client: Any = None,
        ses_client: Any = None,
        namespace: str = parameters.DEFAULT_NAMESPACE
    ):
        self.ssm_client = ssm_client
        self.ses_client = ses_client
        self.namespace = namespace

    def process(
        self,
        body: Optional[str],
        stage: Optional[str] = None,
        is_base64_encoded: bool = False
    ) -> ContactResult:
        """
        Process a single contact form request.

        Args:
            body: Raw JSON request body
            stage: Deployment stage from the request context
            is_base64_encoded: Whether API Gateway base64-encoded the body

        Returns:
            ContactResult with status 200 or 400
        """
        try:
            request = ContactRequest.from_json(decode_body(body, is_base64_encoded))

            failure = self._validate(request)
            if failure is not None:
                logger.warning(f"Validation failed: field={failure.field}, reason={failure.reason}")
                return ContactResult(
                    success=False,
                    status_code=400,
                    body=failure.reason,
                    error_kind='validation'
                )

            recipient = parameters.resolve_recipient(
                stage,
                ssm_client=self.ssm_client,
                namespace=self.namespace
            )

            message = assemble(request, recipient)
            message_id = mailer.send_email(message, ses_client=self.ses_client)

        except ContactError as e:
            logger.warning(f"Contact request failed ({e.kind}): {e}")
            return ContactResult(
                success=False,
                status_code=400,
                body=str(e),
                error_kind=e.kind
            )

        logger.info(f"Contact email sent: message_id={message_id}")
        return ContactResult(
            success=True,
            status_code=200,
            body=SUCCESS_BODY,
            message_id=message_id
        )

    def _validate(self, request: ContactRequest) -> Optional[ValidationResult]:
        """Return the first failing ValidationResult, or None if all fields pass."""
        checks = (
            (validators.validate_email, request.email),
            (validators.validate_subject, request.subject),
            (validators.validate_message, request.message),
            (validators.validate_app_version, request.app_version),
        )
        for validator, value in checks:
            result = validator(value)
            if not result.valid:
                return result
        return None
