import json
import boto3
import os
import logging

logger = logging.getLogger()
logger.setLevel(logging.INFO)

codedeploy = boto3.client('codedeploy')
lambda_client = boto3.client('lambda')

# Fails app version validation, so the function answers without touching SSM or SES
SMOKE_TEST_APP_VERSION = 'smoke-test 0.0.0'
EXPECTED_BODY = f"{SMOKE_TEST_APP_VERSION} app version is not correct"


def build_smoke_test_event():
    return {
        'version': '2.0',
        'routeKey': 'POST /contact',
        'requestContext': {
            'stage': 'pre-traffic',
            'http': {'method': 'POST'}
        },
        'isBase64Encoded': False,
        'body': json.dumps({
            'email': 'pre-traffic@example.com',
            'subject': 'pre-deployment test',
            'message': 'Health check',
            'app_version': SMOKE_TEST_APP_VERSION
        })
    }


def lambda_handler(event, context):
    """
    Pre-traffic hook for CodeDeploy.
    Invokes the new version with a request that must be rejected by validation.
    """
    logger.info(f"Pre-traffic hook triggered: {json.dumps(event)}")

    deployment_id = event['DeploymentId']
    lifecycle_event_hook_execution_id = event['LifecycleEventHookExecutionId']

    try:
        target_function = os.environ.get('TARGET_FUNCTION')
        if not target_function:
            raise ValueError("TARGET_FUNCTION environment variable is not set")

        logger.info(f"Running smoke test on {target_function}")

        response = lambda_client.invoke(
            FunctionName=target_function,
            InvocationType='RequestResponse',
            Payload=json.dumps(build_smoke_test_event())
        )

        response_payload = json.loads(response['Payload'].read())
        logger.info(f"Test response: {json.dumps(response_payload)}")

        if response.get('FunctionError'):
            raise Exception(f"Function returned error: {response_payload}")

        if response_payload.get('statusCode') != 400:
            raise Exception(f"Invalid response status: {response_payload.get('statusCode')}")

        if response_payload.get('body') != EXPECTED_BODY:
            raise Exception(f"Unexpected response body: {response_payload.get('body')}")

        logger.info("Pre-traffic validation passed")

        codedeploy.put_lifecycle_event_hook_execution_status(
            deploymentId=deployment_id,
            lifecycleEventHookExecutionId=lifecycle_event_hook_execution_id,
            status='Succeeded'
        )

        return {
            'statusCode': 200,
            'body': json.dumps('Pre-traffic validation succeeded')
        }

    except Exception as e:
        logger.error(f"Pre-traffic validation failed: {str(e)}", exc_info=True)

        # Report failure - this will prevent deployment
        codedeploy.put_lifecycle_event_hook_execution_status(
            deploymentId=deployment_id,
            lifecycleEventHookExecutionId=lifecycle_event_hook_execution_id,
            status='Failed'
        )

        return {
            'statusCode': 500,
            'body': json.dumps(f'Pre-traffic validation failed: {str(e)}')
        }
