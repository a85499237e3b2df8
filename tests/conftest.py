import copy

import boto3
import pytest
from fastapi.testclient import TestClient
from moto import mock_aws

from app.dependencies import get_store
from app.main import app
from app.models.product import PRIMARY_KEY, StoreError


class FakeProductStore:
    """In-memory stand-in for DynamoProductStore.

    ``page_size`` makes scan return truncated pages with a continuation key;
    ``fail(operation)`` makes the next calls of that operation raise, and
    ``fail_scan_after`` lets that many scan pages succeed first.
    """

    def __init__(self, page_size=None):
        self.items = {}
        self.page_size = page_size
        self.failing = set()
        self.fail_scan_after = 0
        self.scan_calls = 0

    def fail(self, operation, after=0):
        self.failing.add(operation)
        if operation == "scan":
            self.fail_scan_after = after

    def _check(self, operation):
        if operation in self.failing:
            raise StoreError(
                "Requested resource not found",
                code="ResourceNotFoundException",
                status_code=400,
                request_id="FAKEREQUESTID",
            )

    def get(self, product_id):
        self._check("get")
        return copy.deepcopy(self.items.get(product_id, {}))

    def put(self, product):
        self._check("put")
        self.items[product[PRIMARY_KEY]] = copy.deepcopy(product)

    def update(self, product_id, field, value):
        self._check("update")
        item = self.items.setdefault(product_id, {PRIMARY_KEY: product_id})
        item[field] = copy.deepcopy(value)
        return {field: copy.deepcopy(value)}

    def delete(self, product_id):
        self._check("delete")
        old = self.items.pop(product_id, None)
        return {"Attributes": old} if old else {}

    def scan(self, start_key=None):
        self.scan_calls += 1
        if "scan" in self.failing and self.scan_calls > self.fail_scan_after:
            self._check("scan")
        keys = list(self.items)
        start = keys.index(start_key[PRIMARY_KEY]) + 1 if start_key else 0
        end = len(keys) if self.page_size is None else start + self.page_size
        page = [copy.deepcopy(self.items[k]) for k in keys[start:end]]
        next_key = {PRIMARY_KEY: keys[end - 1]} if end < len(keys) else None
        return page, next_key


@pytest.fixture
def store():
    return FakeProductStore(page_size=2)


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def dynamodb_table():
    """
    Spins up a mock DynamoDB instance with a products table keyed on
    productId and yields the boto3 Table.
    """
    with mock_aws():
        dynamodb = boto3.resource("dynamodb", region_name="us-east-1")
        table = dynamodb.create_table(
            TableName="product-crud",
            KeySchema=[{"AttributeName": PRIMARY_KEY, "KeyType": "HASH"}],
            AttributeDefinitions=[
                {"AttributeName": PRIMARY_KEY, "AttributeType": "S"},
            ],
            BillingMode="PAY_PER_REQUEST",
        )
        table.meta.client.get_waiter("table_exists").wait(TableName="product-crud")
        yield table
