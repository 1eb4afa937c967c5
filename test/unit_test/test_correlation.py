"""
Unit tests for correlation ID tracing
"""

import logging
import sys
import unittest
from pathlib import Path

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from bridge_adapter.infra.correlation import (
    CorrelationContext,
    CorrelationFilter,
    generate_correlation_id,
    get_correlation_id,
    set_correlation_id,
    log_with_correlation,
    _correlation_id,
)


class TestCorrelationContext(unittest.TestCase):
    """Tests for correlation ID context management"""

    def test_generate_correlation_id(self):
        """Test correlation ID generation"""
        cid1 = generate_correlation_id()
        cid2 = generate_correlation_id()

        # Should be 12 hex characters
        self.assertEqual(len(cid1), 12)
        self.assertTrue(all(c in "0123456789abcdef" for c in cid1))

        # Should be unique
        self.assertNotEqual(cid1, cid2)

    def test_correlation_context_basic(self):
        """Test basic correlation context usage"""
        self.assertIsNone(get_correlation_id())

        with CorrelationContext() as cid:
            self.assertEqual(get_correlation_id(), cid)
            self.assertEqual(len(cid), 12)

        self.assertIsNone(get_correlation_id())

    def test_correlation_context_with_prefix(self):
        """Test correlation context with custom prefix"""
        with CorrelationContext("bridge") as cid:
            self.assertTrue(cid.startswith("bridge_"))
            self.assertEqual(get_correlation_id(), cid)

    def test_nested_correlation_context(self):
        """Test nested correlation contexts"""
        with CorrelationContext("outer") as outer_cid:
            with CorrelationContext("inner") as inner_cid:
                self.assertEqual(get_correlation_id(), inner_cid)

            # After inner context, should restore outer
            self.assertEqual(get_correlation_id(), outer_cid)

        self.assertIsNone(get_correlation_id())

    def test_context_reset_on_exception(self):
        """The ID is restored even when the body raises"""
        with self.assertRaises(RuntimeError):
            with CorrelationContext("bridge"):
                raise RuntimeError("boom")

        self.assertIsNone(get_correlation_id())

    def test_set_correlation_id_manual(self):
        """Test manual correlation ID setting"""
        token = set_correlation_id("test_cid_12345")
        try:
            self.assertEqual(get_correlation_id(), "test_cid_12345")
        finally:
            _correlation_id.reset(token)

        self.assertIsNone(get_correlation_id())


class TestCorrelationLogging(unittest.TestCase):
    """Tests for correlation-aware logging"""

    def _record(self):
        return logging.LogRecord("bridge", logging.INFO, __file__, 1, "msg", None, None)

    def test_filter_outside_context(self):
        record = self._record()
        self.assertTrue(CorrelationFilter().filter(record))
        self.assertEqual(record.correlation_id, "-")

    def test_filter_inside_context(self):
        record = self._record()
        with CorrelationContext("bridge") as cid:
            CorrelationFilter().filter(record)
        self.assertEqual(record.correlation_id, cid)

    def test_log_with_correlation(self):
        target = logging.getLogger("bridge_adapter.test.correlation")
        with CorrelationContext("bridge") as cid:
            with self.assertLogs(target, level="INFO") as captured:
                log_with_correlation(logging.INFO, "Submitting", "execute", target=target, amount=5)

        record = captured.records[0]
        self.assertEqual(record.getMessage(), f"[{cid}] [execute] Submitting")
        self.assertEqual(record.correlation_id, cid)
        self.assertEqual(record.operation, "execute")
        self.assertEqual(record.amount, 5)


if __name__ == "__main__":
    unittest.main()
