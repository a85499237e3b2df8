# models/product.py
"""DynamoDB access for product records."""

import logging
from decimal import DecimalException

from boto3.dynamodb.types import DYNAMODB_CONTEXT
from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger(__name__)

PRIMARY_KEY = "productId"

# Error codes the AWS SDKs treat as safe to retry
RETRYABLE_CODES = {
    "ProvisionedThroughputExceededException",
    "ThrottlingException",
    "RequestLimitExceeded",
    "InternalServerError",
    "ServiceUnavailable",
}


class StoreError(Exception):
    """A failed call to the key-value store."""

    def __init__(self, message, code=None, status_code=None, request_id=None, retryable=False):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.request_id = request_id
        self.retryable = retryable

    @classmethod
    def from_boto(cls, error):
        if isinstance(error, ClientError):
            details = error.response.get("Error", {})
            metadata = error.response.get("ResponseMetadata", {})
            code = details.get("Code")
            status_code = metadata.get("HTTPStatusCode")
            return cls(
                details.get("Message") or str(error),
                code=code,
                status_code=status_code,
                request_id=metadata.get("RequestId"),
                retryable=code in RETRYABLE_CODES or (status_code or 0) >= 500,
            )
        return cls(str(error), code=type(error).__name__, retryable=True)

    def to_dict(self):
        return {
            "message": self.message,
            "code": self.code,
            "statusCode": self.status_code,
            "requestId": self.request_id,
            "retryable": self.retryable,
        }


def to_dynamo(value):
    """Convert numbers to Decimal, recursively; boto3 rejects float attributes.

    Numbers go through the DynamoDB decimal context, so anything the table
    cannot hold exactly (over 38 digits, out of range) raises a
    ``decimal.DecimalException``.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return DYNAMODB_CONTEXT.create_decimal(str(value))
    if isinstance(value, dict):
        return {k: to_dynamo(v) for k, v in value.items()}
    if isinstance(value, list):
        return [to_dynamo(v) for v in value]
    return value


def build_update(field, value):
    """Build a single-field SET expression.

    The field name goes through ExpressionAttributeNames, never into the
    expression text, so any string is a valid attribute name here.
    """
    return {
        "UpdateExpression": "SET #field = :value",
        "ExpressionAttributeNames": {"#field": field},
        "ExpressionAttributeValues": {":value": value},
    }


class DynamoProductStore:
    """Product table keyed by ``productId``.

    Every method raises :class:`StoreError` when DynamoDB rejects the call.
    """

    def __init__(self, table):
        self.table = table

    def _call(self, operation, **kwargs):
        try:
            return getattr(self.table, operation)(**to_dynamo(kwargs))
        except (ClientError, BotoCoreError) as e:
            error = StoreError.from_boto(e)
            logger.error(f"DynamoDB {operation} failed: {error.code}: {error.message}")
            raise error from e
        except (DecimalException, TypeError) as e:
            # Rejected while serializing, before any request was sent
            error = StoreError(
                f"Unsupported attribute value: {type(e).__name__}",
                code="ValidationException",
                status_code=400,
            )
            logger.error(f"DynamoDB {operation} failed: {error.code}: {error.message}")
            raise error from e

    def get(self, product_id):
        """Return the record, or an empty dict when the key is absent."""
        response = self._call("get_item", Key={PRIMARY_KEY: product_id})
        return response.get("Item", {})

    def put(self, product):
        self._call("put_item", Item=product)

    def update(self, product_id, field, value):
        """Set one attribute and return the attributes that changed."""
        response = self._call(
            "update_item",
            Key={PRIMARY_KEY: product_id},
            ReturnValues="UPDATED_NEW",
            **build_update(field, value),
        )
        return response.get("Attributes", {})

    def delete(self, product_id):
        """Delete unconditionally; returns the old record under ``Attributes`` if there was one."""
        response = self._call(
            "delete_item",
            Key={PRIMARY_KEY: product_id},
            ReturnValues="ALL_OLD",
        )
        return {k: v for k, v in response.items() if k != "ResponseMetadata"}

    def scan(self, start_key=None):
        """Fetch one page. Returns ``(items, next_start_key)``; the key is None on the last page."""
        kwargs = {"ExclusiveStartKey": start_key} if start_key else {}
        response = self._call("scan", **kwargs)
        return response.get("Items", []), response.get("LastEvaluatedKey")
