"""Pytest configuration and shared fixtures."""

import copy

import pytest

from log_bundler.codegen import get_generator
from log_bundler.codegen.core.schema import bundle_from_dict


QUEUE_BUNDLE = {
    "interface": "org.example.QueueMessages",
    "project_code": "AMQ1",
    "methods": [
        {
            "name": "queueNotFound",
            "return_type": "java.lang.String",
            "parameters": [{"type": "java.lang.String", "name": "name"}],
            "message": {"id": 100, "value": "Queue {0} not found"},
        },
        {
            "name": "serverReady",
            "message": {"id": 101, "value": 'Server "ready"\nnow'},
        },
        {
            "name": "queueFailure",
            "return_type": "org.example.QueueException",
            "parameters": [{"type": "String", "name": "queue"}],
            "message": {"id": 102, "value": "Queue {} failed"},
        },
        {
            "name": "pagingDisabled",
            "log_message": {"id": 200, "value": "Paging disabled", "level": "WARN"},
        },
        {
            "name": "addressCreated",
            "parameters": [
                {"type": "String", "name": "address"},
                {"type": "int", "name": "consumers"},
            ],
            "log_message": {"id": 201, "value": "Address {} created with {} consumers"},
        },
        {
            "name": "deliveryFailed",
            "parameters": [{"type": "java.lang.Throwable", "name": "cause"}],
            "log_message": {"id": 202, "value": "Delivery failed", "level": "error"},
        },
        {"name": "getLogger", "get_logger": True},
        {"name": "helper", "return_type": "int"},
    ],
}

ORDER_BUNDLE = {
    "interface": "shop.messages.OrderMessages",
    "project_code": "SHOP",
    "methods": [
        {
            "name": "order_missing",
            "return_type": "str",
            "parameters": [{"type": "int", "name": "order_id"}],
            "message": {"id": 1, "value": "Order {} is missing"},
        },
        {
            "name": "order_error",
            "return_type": "shop.errors.OrderError",
            "parameters": [{"type": "decimal.Decimal", "name": "total"}],
            "message": {"id": 2, "value": "Total {} rejected"},
        },
        {
            "name": "stock_low",
            "parameters": [{"type": "str", "name": "sku"}],
            "log_message": {"id": 3, "value": "Stock low for {}", "level": "WARN"},
        },
        {
            "name": "shop_opened",
            "log_message": {"id": 4, "value": "Shop opened"},
        },
        {"name": "logger", "get_logger": True},
    ],
}


@pytest.fixture
def queue_bundle_doc():
    """Java-flavoured bundle document using the AMQ1 project code."""
    return copy.deepcopy(QUEUE_BUNDLE)


@pytest.fixture
def order_bundle_doc():
    """Python-flavoured bundle document."""
    return copy.deepcopy(ORDER_BUNDLE)


@pytest.fixture
def queue_bundle(queue_bundle_doc):
    return bundle_from_dict(queue_bundle_doc)


@pytest.fixture
def order_bundle(order_bundle_doc):
    return bundle_from_dict(order_bundle_doc)


@pytest.fixture
def java_generator():
    return get_generator("java")


@pytest.fixture
def python_generator():
    return get_generator("python")


def make_bundle_doc(interface, project_code="TST", methods=()):
    """Build a minimal bundle document."""
    return {"interface": interface, "project_code": project_code, "methods": list(methods)}


def message_method(name, message_id, value="Message {}", parameters=None):
    return {
        "name": name,
        "parameters": parameters if parameters is not None else [{"type": "String", "name": "arg"}],
        "message": {"id": message_id, "value": value},
    }


@pytest.fixture
def bundle_doc_factory():
    """Factory building bundle documents from method entries."""
    return make_bundle_doc


@pytest.fixture
def message_method_factory():
    """Factory building Message method entries."""
    return message_method
