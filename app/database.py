# database.py
"""DynamoDB configuration and table handle."""

import os
import logging
from functools import lru_cache

import boto3
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Load environment variables from the .env file
load_dotenv()

TABLE_NAME = os.getenv('PRODUCTS_TABLE_NAME', 'product-crud')
AWS_REGION = os.getenv('AWS_REGION', 'us-east-1')

# Optional override for DynamoDB Local / LocalStack
ENDPOINT_URL = os.getenv('DYNAMODB_ENDPOINT_URL') or None


@lru_cache(maxsize=1)
def get_table():
    """Return the products table, creating the boto3 resource on first use.

    The handle is cached for the lifetime of the Lambda execution
    environment so warm invocations reuse the same connection pool.
    """
    logger.info(f"Connecting to DynamoDB table {TABLE_NAME} in {AWS_REGION}...")
    dynamodb = boto3.resource('dynamodb', region_name=AWS_REGION, endpoint_url=ENDPOINT_URL)
    return dynamodb.Table(TABLE_NAME)
