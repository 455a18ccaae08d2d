"""
S3 Data Access Object for reading uploaded broker exports.
"""
import logging
import os
import boto3
from typing import Optional, Dict, Any
from botocore.exceptions import ClientError

# Configure logging
logger = logging.getLogger(__name__)

def get_s3_client():
    return boto3.client('s3', region_name=os.environ.get('AWS_REGION', 'eu-west-2'))

# Get bucket name from environment
FILE_STORAGE_BUCKET = os.environ.get('FILE_STORAGE_BUCKET', 'tradejournal-dev-file-storage')

def get_object(key: str, bucket: Optional[str] = None) -> Optional[Dict[str, Any]]:
    """
    Get an object from S3.

    Args:
        key: The S3 key of the object to retrieve
        bucket: Optional bucket name (defaults to FILE_STORAGE_BUCKET)

    Returns:
        The S3 object response if successful, None otherwise
    """
    try:
        bucket = bucket or FILE_STORAGE_BUCKET
        response = get_s3_client().get_object(Bucket=bucket, Key=key)
        return response
    except ClientError as e:
        logger.error(f"Error getting object from S3: {str(e)}")
        return None

def get_object_content(key: str, bucket: Optional[str] = None) -> Optional[bytes]:
    """
    Get the content of an S3 object.

    Args:
        key: The S3 key of the object
        bucket: Optional bucket name (defaults to FILE_STORAGE_BUCKET)

    Returns:
        The object content as bytes if successful, None otherwise
    """
    try:
        response = get_object(key, bucket)
        if response:
            return response['Body'].read()
        return None
    except Exception as e:
        logger.error(f"Error reading object content from S3: {str(e)}")
        return None
