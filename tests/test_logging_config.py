"""Tests for log masking of key material."""

import logging

from common.logging_config import SensitiveDataFilter
from signer.key_codec import encode_private_key


def _record(msg, args=None):
    return logging.LogRecord('test', logging.INFO, __file__, 1, msg, args, None)


def test_private_key_pem_masked(rsa_private_key):
    """A PEM private key in a message is replaced entirely."""
    pem = encode_private_key(rsa_private_key)
    record = _record(f"settings: {pem}")

    SensitiveDataFilter().filter(record)

    assert 'PRIVATE KEY-----' not in record.msg
    assert '***MASKED PRIVATE KEY***' in record.msg


def test_private_key_field_masked_in_args():
    """A privateKey field passed as an argument is masked."""
    record = _record("document %s", ('{"privateKey": "abc123"}',))

    SensitiveDataFilter().filter(record)

    assert 'abc123' not in record.getMessage()


def test_ordinary_message_untouched():
    """Messages without secrets pass through unchanged."""
    record = _record("Appended record for a.txt [cid=QmA]")

    assert SensitiveDataFilter().filter(record) is True
    assert record.msg == "Appended record for a.txt [cid=QmA]"
