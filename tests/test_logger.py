import logging
from dataclasses import dataclass

from structmap import struct_to_map, tagged_field
from structmap.core.logger import (
    _RecordPathFilter,
    configure_root_logger,
    current_record_path,
    get_logger,
    push_record_path,
    reset_record_path,
)


@dataclass
class Inner:
    value: str = tagged_field(default="", json="value,omitempty")


@dataclass
class Wrapper:
    inner: Inner = tagged_field(default_factory=Inner, json="inner")


def test_record_path_push_and_reset():
    assert current_record_path() == "-"

    outer = push_record_path("Order")
    inner = push_record_path("customer")
    assert current_record_path() == "Order.customer"

    reset_record_path(inner)
    assert current_record_path() == "Order"
    reset_record_path(outer)
    assert current_record_path() == "-"


def test_empty_segment_is_noop():
    assert push_record_path("") is None
    reset_record_path(None)
    assert current_record_path() == "-"


def test_filter_injects_record_path():
    record = logging.LogRecord("structmap", logging.INFO, __file__, 1, "msg", None, None)
    token = push_record_path("Order")
    try:
        assert _RecordPathFilter().filter(record) is True
    finally:
        reset_record_path(token)

    assert record.record_path == "Order"


def test_configure_root_logger_is_idempotent():
    root = logging.getLogger()
    original = list(root.handlers)
    original_level = root.level
    try:
        configure_root_logger("DEBUG")
        configure_root_logger("WARNING")

        ours = [h for h in root.handlers if any(isinstance(f, _RecordPathFilter) for f in h.filters)]
        assert len(ours) == 1
        assert logging.getLogger("structmap").level == logging.WARNING
    finally:
        root.handlers[:] = original
        root.setLevel(original_level)
        logging.getLogger("structmap").setLevel(logging.NOTSET)


def test_get_logger_without_level_does_not_touch_handlers():
    root = logging.getLogger()
    before = list(root.handlers)

    logger = get_logger("structmap.test")

    assert logger.name == "structmap.test"
    assert root.handlers == before


def test_mapper_logs_skipped_fields_at_debug(caplog):
    with caplog.at_level(logging.DEBUG, logger="structmap"):
        out = struct_to_map(Wrapper())

    assert out == {"inner": {}}
    assert "Skipping value: empty value with omitempty" in caplog.text
    assert current_record_path() == "-"
