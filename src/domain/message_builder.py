"""
Outbound message composition.

The resolved address is both the destination and the Source, and the
submitter goes in Reply-To. Inputs are assumed to be validated already.
"""

from .models import CHARSET, ContactRequest, OutboundMessage

APP_VERSION_SEPARATOR = '  ### app version: '


def build_body(message: str, app_version: str) -> str:
    return message + APP_VERSION_SEPARATOR + app_version


def assemble(request: ContactRequest, recipient: str) -> OutboundMessage:
    """
    Compose the email for a validated contact request.

    Args:
        request: Validated contact form submission
        recipient: Address resolved from Parameter Store

    Returns:
        OutboundMessage ready for SES
    """
    return OutboundMessage(
        sender=recipient,
        recipients=frozenset([recipient]),
        reply_to=request.email,
        subject=request.subject,
        body=build_body(request.message, request.app_version),
        charset=CHARSET,
    )
