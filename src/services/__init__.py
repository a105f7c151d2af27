"""
AWS service wrappers for Lambda handlers.

This package contains the Parameter Store lookup, the SES sender and the
shared boto3 session they are built on.
"""

__all__ = ['aws', 'mailer', 'parameters']
