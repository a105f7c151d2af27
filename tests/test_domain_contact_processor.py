"""
Tests for the contact form pipeline.
"""

import base64
import json
import pytest
from unittest.mock import Mock, patch
from botocore.exceptions import ClientError
import sys
import os

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '../src'))

from domain.contact_processor import ContactProcessor, SUCCESS_BODY
from domain.errors import UnknownFieldError


@pytest.fixture
def ssm_client():
    client = Mock()
    client.get_parameter.return_value = {'Parameter': {'Value': 'ops@svc.com'}}
    return client


@pytest.fixture
def ses_client():
    client = Mock()
    client.send_email.return_value = {'MessageId': 'ses-123'}
    return client


@pytest.fixture
def processor(ssm_client, ses_client):
    return ContactProcessor(ssm_client=ssm_client, ses_client=ses_client)


class TestProcessSuccess:
    """Test the happy path."""

    def test_sends_email(self, processor, ssm_client, ses_client, valid_body):
        result = processor.process(json.dumps(valid_body), "dev")

        assert result.success is True
        assert result.status_code == 200
        assert result.body == '{"message":"message sent successfully"}'
        assert result.body == SUCCESS_BODY
        assert result.message_id == 'ses-123'
        assert result.error_kind is None

        ssm_client.get_parameter.assert_called_once_with(
            Name='/collaction/dev/contact/email',
            WithDecryption=True
        )
        kwargs = ses_client.send_email.call_args[1]
        assert kwargs['Source'] == 'ops@svc.com'
        assert kwargs['Destination'] == {'ToAddresses': ['ops@svc.com']}
        assert kwargs['ReplyToAddresses'] == ['a@b.com']
        assert kwargs['Message']['Subject']['Data'] == 'Hi'
        assert kwargs['Message']['Body']['Text']['Data'] == 'Hello  ### app version: android 2.0.0+10'

    def test_missing_stage_defaults_to_dev(self, processor, ssm_client, valid_body):
        processor.process(json.dumps(valid_body), None)

        assert ssm_client.get_parameter.call_args[1]['Name'] == '/collaction/dev/contact/email'

    def test_custom_namespace(self, ssm_client, ses_client, valid_body):
        processor = ContactProcessor(ssm_client=ssm_client, ses_client=ses_client, namespace='acme')

        processor.process(json.dumps(valid_body), "prod")

        assert ssm_client.get_parameter.call_args[1]['Name'] == '/acme/prod/contact/email'


class TestProcessFailures:
    """Test each failure category maps to a 400 with plain text."""

    def test_malformed_json(self, processor, ssm_client, ses_client):
        result = processor.process('{not json', "dev")

        assert result.success is False
        assert result.status_code == 400
        assert result.error_kind == 'malformed_request'
        assert result.body
        ssm_client.get_parameter.assert_not_called()
        ses_client.send_email.assert_not_called()

    def test_first_validation_failure_wins(self, processor, ssm_client, valid_body):
        valid_body['subject'] = 's' * 51
        valid_body['app_version'] = 'windows 1.2.3+4'

        result = processor.process(json.dumps(valid_body), "dev")

        assert result.status_code == 400
        assert result.error_kind == 'validation'
        assert result.body == "email subject is more than 50 characters"
        ssm_client.get_parameter.assert_not_called()

    def test_invalid_email_checked_first(self, processor, valid_body):
        valid_body['email'] = 'not-an-email'
        valid_body['message'] = 'm' * 501

        result = processor.process(json.dumps(valid_body), "dev")

        assert result.error_kind == 'validation'
        assert "@-sign" in result.body

    @pytest.mark.parametrize("email", [".:", '(bb".\\().\\)', "aa@[ ", "a@b.com,"])
    def test_unparseable_email_is_validation_failure(self, processor, ssm_client, ses_client,
                                                    valid_body, email):
        valid_body['email'] = email

        result = processor.process(json.dumps(valid_body), "dev")

        assert result.success is False
        assert result.status_code == 400
        assert result.error_kind == 'validation'
        assert result.body
        ssm_client.get_parameter.assert_not_called()
        ses_client.send_email.assert_not_called()

    def test_invalid_base64_body(self, processor, ssm_client):
        result = processor.process('abc', "dev", is_base64_encoded=True)

        assert result.status_code == 400
        assert result.error_kind == 'malformed_request'
        assert result.body.startswith("request body is not valid base64")
        ssm_client.get_parameter.assert_not_called()

    def test_base64_body_not_utf8(self, processor):
        result = processor.process(base64.b64encode(b'\xff\xfe').decode('ascii'), "dev",
                                   is_base64_encoded=True)

        assert result.error_kind == 'malformed_request'
        assert result.body.startswith("request body is not valid UTF-8")

    def test_base64_body_decoded(self, processor, valid_body):
        encoded = base64.b64encode(json.dumps(valid_body).encode('utf-8')).decode('ascii')

        result = processor.process(encoded, "dev", is_base64_encoded=True)

        assert result.success is True

    def test_message_too_long(self, processor, valid_body):
        valid_body['message'] = 'm' * 501

        result = processor.process(json.dumps(valid_body), "dev")

        assert result.body == "email message is more than 500 characters"

    def test_bad_app_version(self, processor, valid_body):
        valid_body['app_version'] = 'ios 1.2.3'

        result = processor.process(json.dumps(valid_body), "dev")

        assert result.body == "ios 1.2.3 app version is not correct"

    def test_empty_parameter_value(self, processor, ssm_client, ses_client, valid_body):
        ssm_client.get_parameter.return_value = {'Parameter': {'Value': ''}}

        result = processor.process(json.dumps(valid_body), "dev")

        assert result.status_code == 400
        assert result.error_kind == 'configuration'
        assert result.body == "no email value"
        ses_client.send_email.assert_not_called()

    def test_parameter_lookup_error(self, processor, ssm_client, ses_client, valid_body):
        error = ClientError(
            {'Error': {'Code': 'AccessDeniedException', 'Message': 'not authorized'}},
            'GetParameter'
        )
        ssm_client.get_parameter.side_effect = error

        result = processor.process(json.dumps(valid_body), "dev")

        assert result.status_code == 400
        assert result.error_kind == 'configuration'
        assert result.body == str(error)
        ses_client.send_email.assert_not_called()

    def test_send_error(self, processor, ses_client, valid_body):
        error = ClientError(
            {'Error': {'Code': 'MessageRejected', 'Message': 'Email address is not verified.'}},
            'SendEmail'
        )
        ses_client.send_email.side_effect = error

        result = processor.process(json.dumps(valid_body), "dev")

        assert result.status_code == 400
        assert result.error_kind == 'send'
        assert result.body == str(error)
        ses_client.send_email.assert_called_once()

    def test_programming_fault_propagates(self, processor, valid_body):
        with patch('domain.validators.validate_email', side_effect=UnknownFieldError("unknown field email")):
            with pytest.raises(UnknownFieldError):
                processor.process(json.dumps(valid_body), "dev")


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
