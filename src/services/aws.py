"""
AWS session and client factory.

One boto3 session per process, created on first use and reused across warm
invocations. Clients are cached per service name and passed explicitly to
the services that need them.
"""

import logging
from typing import Any, Dict, Optional

import boto3
from botocore.config import Config

logger = logging.getLogger(__name__)

# Single attempt per call (no retries); the Lambda timeout bounds the rest
client_config = Config(
    retries={
        'max_attempts': 1,
        'mode': 'standard'
    }
)

_session: Optional[boto3.session.Session] = None
_clients: Dict[str, Any] = {}


def get_session() -> boto3.session.Session:
    """Return the process-wide boto3 session, creating it on first call."""
    global _session
    if _session is None:
        _session = boto3.session.Session()
        logger.info(f"AWS session initialized: region={_session.region_name}")
    return _session


def get_client(service_name: str) -> Any:
    """
    Return a cached client for service_name.

    Args:
        service_name: boto3 service name, e.g. "ses" or "ssm"

    Returns:
        boto3 client configured with a single attempt per call
    """
    client = _clients.get(service_name)
    if client is None:
        client = get_session().client(service_name, config=client_config)
        _clients[service_name] = client
        logger.info(f"{service_name} client initialized with max_attempts=1")
    return client


def reset() -> None:
    """Drop the cached session and clients."""
    global _session
    _session = None
    _clients.clear()
