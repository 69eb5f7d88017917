"""
Tests for the JSON logging setup
"""
import json
import logging
import sys
from datetime import datetime

from repair_shop.logger import JsonFormatter, get_logger, log_context


def make_record(message, **extra):
    record = logging.LogRecord(
        name='repair_shop.test', level=logging.INFO, pathname=__file__, lineno=10,
        msg=message, args=(), exc_info=None, func='make_record',
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_log_context_wraps_fields():
    assert log_context(order_id=7, status='Received') == {'context': {'order_id': 7, 'status': 'Received'}}


def test_formatter_emits_context():
    formatter = JsonFormatter({'level': 'levelname', 'logger': 'name', 'message': 'message'})
    record = make_record("Input found", **log_context(input_id=3, started_at=datetime(2024, 3, 1, 8, 0)))

    payload = json.loads(formatter.format(record))

    assert payload['level'] == 'INFO'
    assert payload['logger'] == 'repair_shop.test'
    assert payload['message'] == 'Input found'
    assert payload['context'] == {'input_id': 3, 'started_at': '2024-03-01 08:00:00'}


def test_formatter_omits_empty_context():
    payload = json.loads(JsonFormatter().format(make_record("plain")))

    assert payload == {'message': 'plain'}


def test_formatter_includes_traceback():
    try:
        raise KeyError('quantity')
    except KeyError:
        record = make_record("failed", exc_info=sys.exc_info())

    payload = json.loads(JsonFormatter().format(record))

    assert 'KeyError' in payload['exc_info']


def test_get_logger_nests_names_under_package():
    assert get_logger('business.orders').name == 'repair_shop.business.orders'
    assert get_logger('repair_shop.services').name == 'repair_shop.services'
    assert get_logger().name == 'repair_shop'


def test_root_logger_configured_once():
    root = get_logger()
    handlers = list(root.handlers)

    assert get_logger() is root
    assert root.handlers == handlers
    assert any(isinstance(handler.formatter, JsonFormatter) for handler in handlers)
