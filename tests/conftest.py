"""
Pytest configuration and fixtures for all tests.
"""

import os
import sys
import pytest

# Add src and hooks to Python path before any imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '../src'))
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '../hooks'))

# Set up test environment variables before importing any modules
os.environ.setdefault('AWS_DEFAULT_REGION', 'us-west-2')
os.environ.setdefault('PARAMETER_NAMESPACE', 'collaction')
os.environ.setdefault('LOG_LEVEL', 'INFO')


@pytest.fixture
def valid_body():
    """Request body that passes every validator."""
    return {
        'email': 'a@b.com',
        'subject': 'Hi',
        'message': 'Hello',
        'app_version': 'android 2.0.0+10'
    }
