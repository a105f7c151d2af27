"""
Recipient lookup in AWS Systems Manager Parameter Store.

The contact address lives at ``/<namespace>/<stage>/contact/email`` and is
read fresh on every request.
"""

import logging
from typing import Any, Optional

from botocore.exceptions import BotoCoreError, ClientError

from domain.errors import MissingParameterError, ParameterLookupError
from services import aws

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = 'collaction'
DEFAULT_STAGE = 'dev'
PARAMETER_TEMPLATE = '/{namespace}/{stage}/contact/email'


def parameter_name(stage: Optional[str], namespace: str = DEFAULT_NAMESPACE) -> str:
    """
    Build the Parameter Store key for a deployment stage.

    Example:
        >>> parameter_name("prod")
        '/collaction/prod/contact/email'
        >>> parameter_name("")
        '/collaction/dev/contact/email'
    """
    return PARAMETER_TEMPLATE.format(namespace=namespace, stage=stage or DEFAULT_STAGE)


def get_parameter_value(name: str, ssm_client: Any = None) -> str:
    """
    Fetch one parameter value.

    Args:
        name: Full parameter name
        ssm_client: SSM client (defaults to the shared process client)

    Returns:
        str: The parameter value (may be empty)

    Raises:
        ParameterLookupError: If the SSM call fails
    """
    client = ssm_client or aws.get_client('ssm')

    try:
        response = client.get_parameter(Name=name, WithDecryption=True)
    except ClientError as e:
        error_code = e.response.get('Error', {}).get('Code', 'Unknown')
        error_message = e.response.get('Error', {}).get('Message', str(e))
        logger.error(
            f"Failed to read parameter: name={name}, "
            f"error_code={error_code}, error_message={error_message}"
        )
        raise ParameterLookupError(str(e)) from e
    except BotoCoreError as e:
        logger.error(f"Failed to read parameter {name}: {e}")
        raise ParameterLookupError(str(e)) from e

    return response.get('Parameter', {}).get('Value') or ''


def resolve_recipient(
    stage: Optional[str],
    ssm_client: Any = None,
    namespace: str = DEFAULT_NAMESPACE
) -> str:
    """
    Resolve the contact address for a stage.

    Args:
        stage: Deployment stage from the request context ("" means "dev")
        ssm_client: SSM client (defaults to the shared process client)
        namespace: Application namespace in the parameter path

    Returns:
        str: Non-empty email address

    Raises:
        ParameterLookupError: If the SSM call fails
        MissingParameterError: If the parameter value is empty
    """
    name = parameter_name(stage, namespace)
    logger.info(f"Resolving recipient from parameter: {name}")

    value = get_parameter_value(name, ssm_client)
    if not value:
        logger.error(f"Parameter {name} has no value")
        raise MissingParameterError("no email value")

    return value
