"""
AWS Lambda handler for the contact form endpoint (API Gateway HTTP API).

Thin orchestration layer that delegates to ContactProcessor.
Policy: every expected failure is answered with a 400 and the plain error
text; the X-Error-Kind header tells the failure categories apart.
"""

import logging
import os
from typing import Dict, Any

from domain.contact_processor import ContactProcessor
from domain.models import ContactResult

# Configure logging
logger = logging.getLogger()
logger.setLevel(os.environ.get('LOG_LEVEL', 'INFO'))

# Add console handler for local testing (AWS Lambda provides handlers automatically)
if not logger.handlers:
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO)
    formatter = logging.Formatter('%(levelname)s - %(message)s')
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

PARAMETER_NAMESPACE = os.environ.get('PARAMETER_NAMESPACE', 'collaction')

# Initialize processor once at module level (AWS clients are created on first use)
contact_processor = ContactProcessor(namespace=PARAMETER_NAMESPACE)


def _to_response(result: ContactResult) -> Dict[str, Any]:
    if result.success:
        return {
            'statusCode': result.status_code,
            'headers': {
                'Content-Type': 'application/json'
            },
            'body': result.body
        }

    return {
        'statusCode': result.status_code,
        'headers': {
            'Content-Type': 'text/plain; charset=utf-8',
            'X-Error-Kind': result.error_kind or 'unknown'
        },
        'body': result.body
    }


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Handle a contact form POST.

    Expected body:
    {
        "email": "user@example.com",
        "subject": "Hi",
        "message": "Hello",
        "app_version": "ios 1.2.3+4"
    }

    Args:
        event: API Gateway HTTP API (payload v2) event
        context: Lambda context

    Returns:
        Dict with statusCode, headers and body
    """
    request_context = event.get('requestContext') or {}
    stage = request_context.get('stage') or 'dev'
    logger.info(f"Contact request received: stage={stage}")

    result = contact_processor.process(
        event.get('body'),
        stage,
        is_base64_encoded=bool(event.get('isBase64Encoded'))
    )

    if result.success:
        logger.info(f"✓ Contact email sent: {result!r}")
    else:
        logger.warning(f"⚠ Contact request rejected: {result!r}")

    return _to_response(result)
