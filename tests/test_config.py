import io
import json
import logging
import os
import unittest
from unittest.mock import patch

from config.logging_config import JsonFormatter, configure_logging
from config.portfolio_config import ASSET_TYPE_ORDER, DEFAULT_TYPE_RANK
from services.portfolio.types import AssetTypeOrder


class TestAssetTypeOrder(unittest.TestCase):
    def test_default_ranks(self):
        order = AssetTypeOrder.default()
        self.assertEqual(order.rank("国内株式"), 1)
        self.assertEqual(order.rank("外国債券"), 8)
        self.assertEqual(order.rank("現金"), 98)
        self.assertEqual(order.rank("仮想通貨"), 99)
        self.assertEqual(order.rank("不動産"), DEFAULT_TYPE_RANK)

    def test_unlisted_types_sit_between_securities_and_cash(self):
        order = AssetTypeOrder.default()
        self.assertGreater(order.default_rank, max(r for r in ASSET_TYPE_ORDER.values() if r < 90))
        self.assertLess(order.default_rank, order.rank("現金"))

    def test_default_table_is_a_copy(self):
        order = AssetTypeOrder.default()
        self.assertEqual(order.ranks, ASSET_TYPE_ORDER)
        self.assertIsNot(order.ranks, ASSET_TYPE_ORDER)


class TestLoggingConfig(unittest.TestCase):
    def setUp(self):
        root = logging.getLogger()
        self._handlers = root.handlers[:]
        self._level = root.level

    def tearDown(self):
        root = logging.getLogger()
        for h in root.handlers[:]:
            root.removeHandler(h)
        for h in self._handlers:
            root.addHandler(h)
        root.setLevel(self._level)

    def test_json_formatter_shape(self):
        record = logging.LogRecord(
            name="services.portfolio.state",
            level=logging.INFO,
            pathname=__file__,
            lineno=1,
            msg="holding_added portfolio_index=%d",
            args=(0,),
            exc_info=None,
        )
        record.extra = {"holding_id": "manual_1", "skipped": None}
        payload = json.loads(JsonFormatter().format(record))

        self.assertEqual(payload["level"], "INFO")
        self.assertEqual(payload["logger"], "services.portfolio.state")
        self.assertEqual(payload["message"], "holding_added portfolio_index=0")
        self.assertEqual(payload["holding_id"], "manual_1")
        self.assertNotIn("skipped", payload)
        self.assertTrue(payload["ts"].endswith("Z"))

    def test_configure_logging_reads_env(self):
        with patch.dict(os.environ, {"LOG_LEVEL": "debug", "LOG_JSON": "1"}):
            configure_logging()
        root = logging.getLogger()
        self.assertEqual(root.level, logging.DEBUG)
        self.assertEqual(len(root.handlers), 1)
        self.assertIsInstance(root.handlers[0].formatter, JsonFormatter)

    def test_configure_logging_replaces_handlers(self):
        with patch.dict(os.environ, {"LOG_LEVEL": "WARNING", "LOG_JSON": ""}):
            configure_logging()
            configure_logging()
        root = logging.getLogger()
        self.assertEqual(root.level, logging.WARNING)
        self.assertEqual(len(root.handlers), 1)
        self.assertNotIsInstance(root.handlers[0].formatter, JsonFormatter)

    def test_plain_format_output(self):
        with patch.dict(os.environ, {"LOG_LEVEL": "INFO", "LOG_JSON": "0"}):
            configure_logging()
        stream = io.StringIO()
        logging.getLogger().handlers[0].setStream(stream)
        logging.getLogger("services.portfolio.state").info("state_reset")
        self.assertIn("[INFO] services.portfolio.state: state_reset", stream.getvalue())


if __name__ == "__main__":
    unittest.main()
