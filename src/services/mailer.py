"""
Amazon SES delivery for assembled contact messages.
"""

import logging
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from domain.errors import EmailSendError
from domain.models import OutboundMessage
from services import aws

logger = logging.getLogger(__name__)


def send_email(message: OutboundMessage, ses_client: Any = None) -> str:
    """
    Send an OutboundMessage through SES (single attempt).

    Args:
        message: Assembled message
        ses_client: SES client (defaults to the shared process client)

    Returns:
        str: SES MessageId

    Raises:
        EmailSendError: If SES rejects the message or the call fails
    """
    client = ses_client or aws.get_client('ses')

    logger.info(
        f"Sending email: source={message.sender}, "
        f"recipients={len(message.recipients)}, subject_length={len(message.subject)}"
    )

    try:
        response = client.send_email(**message.to_ses_request())
    except ClientError as e:
        error_code = e.response.get('Error', {}).get('Code', 'Unknown')
        error_message = e.response.get('Error', {}).get('Message', str(e))
        logger.error(
            f"SES send failed: error_code={error_code}, error_message={error_message}"
        )
        raise EmailSendError(str(e)) from e
    except BotoCoreError as e:
        logger.error(f"SES send failed: {e}")
        raise EmailSendError(str(e)) from e

    message_id = response.get('MessageId', '')
    logger.info(f"SES accepted message: {message_id}")
    return message_id
