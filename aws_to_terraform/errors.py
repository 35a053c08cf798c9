"""
AWS error handling shared by all resource fetchers.

A handful of S3 error codes only mean "this bucket has no such configuration".
They are treated as an absent configuration rather than a failure so that one
bucket without a policy does not abort the whole run.
"""

from typing import Any, Callable, Optional

from botocore.exceptions import ClientError

ALLOWED_ERROR_CODES = frozenset([
    'NoSuchBucketPolicy',
    'NoSuchWebsiteConfiguration',
    'NoSuchLifecycleConfiguration',
    'ReplicationConfigurationNotFoundError',
    'ServerSideEncryptionConfigurationNotFoundError',
    'NoSuchCORSConfiguration',
])


def error_code(err: Exception) -> Optional[str]:
    """Return the AWS error code of a ClientError, or None for anything else."""
    if isinstance(err, ClientError):
        return err.response.get('Error', {}).get('Code')
    return None


def handle_error(err: Optional[Exception]) -> Optional[Exception]:
    """
    Translate an error at the AWS boundary.

    Args:
        err: Error raised by a boto3 call (or None)

    Returns:
        None when the error is an allow-listed "configuration not found"
        code, otherwise the original error unchanged
    """
    if err is None or error_code(err) in ALLOWED_ERROR_CODES:
        return None
    return err


def call_optional(call: Callable[..., Any], **kwargs: Any) -> Optional[Any]:
    """
    Run a boto3 call whose configuration may legitimately be missing.

    Returns:
        The API response, or None if the call failed with an allow-listed code

    Raises:
        ClientError: For any other AWS error
    """
    try:
        return call(**kwargs)
    except ClientError as e:
        if handle_error(e) is None:
            return None
        raise
