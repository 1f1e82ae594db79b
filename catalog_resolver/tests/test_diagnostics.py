"""
Tests for diagnostic formatting and counting.
"""

import logging
import unittest

from catalog_resolver.diagnostics import DiagnosticCounter, DiagnosticFormatter, SourceInfo, configure_logging


def make_record(level, message, **extra):
    record = logging.LogRecord("catalog_resolver.test", level, __file__, 1, message, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestSourceInfo(unittest.TestCase):
    def test_str(self):
        self.assertEqual(str(SourceInfo()), "<unknown>")
        self.assertEqual(str(SourceInfo("a.fsh")), "a.fsh")
        self.assertEqual(str(SourceInfo("a.fsh", 3)), "a.fsh:3")
        self.assertEqual(str(SourceInfo("a.fsh", 3, 3)), "a.fsh:3")
        self.assertEqual(str(SourceInfo("a.fsh", 3, 7)), "a.fsh:3-7")


class TestDiagnosticFormatter(unittest.TestCase):
    def test_without_location(self):
        text = DiagnosticFormatter().format(make_record(logging.ERROR, "boom"))
        self.assertEqual(text, "ERROR boom")

    def test_with_location(self):
        record = make_record(logging.ERROR, "boom", source_info=SourceInfo("a.fsh", 3, 7))
        self.assertEqual(DiagnosticFormatter().format(record), "ERROR boom\n  File: a.fsh:3-7")

    def test_empty_location(self):
        record = make_record(logging.WARNING, "careful", source_info=None)
        self.assertEqual(DiagnosticFormatter().format(record), "WARNING careful")


class TestDiagnosticCounter(unittest.TestCase):
    def test_counts(self):
        counter = DiagnosticCounter()
        for level in (logging.ERROR, logging.ERROR, logging.WARNING):
            counter.handle(make_record(level, "x"))
        self.assertEqual((counter.errors, counter.warnings), (2, 1))
        counter.reset()
        self.assertEqual((counter.errors, counter.warnings), (0, 0))

    def test_info_is_ignored(self):
        counter = DiagnosticCounter()
        counter.handle(make_record(logging.INFO, "x"))
        self.assertEqual((counter.errors, counter.warnings), (0, 0))


class TestConfigureLogging(unittest.TestCase):
    def tearDown(self):
        logger = logging.getLogger("catalog_resolver")
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)

    def test_reconfiguring_replaces_handlers(self):
        configure_logging()
        counter = configure_logging(verbose=True)
        logger = logging.getLogger("catalog_resolver")
        self.assertEqual(len(logger.handlers), 2)
        self.assertIn(counter, logger.handlers)
        self.assertEqual(logger.level, logging.DEBUG)


if __name__ == "__main__":
    unittest.main()
