"""Tests for the exception system, embedding config and project logger."""
from __future__ import annotations

import json
import logging
import os
import shutil
import tempfile
import unittest
from unittest.mock import patch

from vectorguard.config import EmbeddingConfig, load_embedding_config
from vectorguard.core.exceptions import (
    ConfigurationError,
    EmbeddingConversionError,
    ProjectError,
    SuspiciousEmbeddingSizeError,
    ValidationError,
    exception_factory,
)
from vectorguard.core.logger import JsonFormatter, LoggerConfig, configure
from vectorguard.embeddings import LoggingDiagnostics, RecordingDiagnostics
from vectorguard.services import EmbeddingRecord, EmbeddingRepairService


class TestExceptions(unittest.TestCase):
    def test_defaults_from_class(self) -> None:
        err = ValidationError("bad")
        self.assertEqual(err.code, "VALIDATION_ERROR")
        self.assertEqual(err.http_status, 400)
        self.assertEqual(str(err), "bad")
        self.assertEqual(err.to_dict(), {"message": "bad", "code": "VALIDATION_ERROR", "http_status": 400})

    def test_factory_type(self) -> None:
        StaleVectorError = exception_factory("StaleVectorError", http_status=409, base=EmbeddingConversionError)
        err = StaleVectorError("old model", details={"model": "embedding-001"})
        self.assertIsInstance(err, EmbeddingConversionError)
        self.assertEqual(err.code, "STALEVECTORERROR")
        self.assertEqual(err.http_status, 409)
        self.assertEqual(err.to_dict()["details"], {"model": "embedding-001"})

    def test_guard_types_carry_codes(self) -> None:
        err = SuspiciousEmbeddingSizeError("too big", details={"observed": 90000})
        self.assertEqual(err.code, "SUSPICIOUS_SIZE")
        self.assertEqual(err.http_status, 422)
        self.assertIsInstance(err, ProjectError)
        self.assertEqual(SuspiciousEmbeddingSizeError.__name__, "SuspiciousEmbeddingSizeError")

    def test_minted_types_live_with_their_family(self) -> None:
        TruncatedVectorError = exception_factory(
            "TruncatedVectorError",
            code="TRUNCATED_VECTOR",
            http_status=422,
            base=EmbeddingConversionError,
            doc="Vector ended before the declared length.",
        )
        self.assertEqual(TruncatedVectorError.__module__, EmbeddingConversionError.__module__)
        self.assertEqual(SuspiciousEmbeddingSizeError.__module__, EmbeddingConversionError.__module__)
        self.assertEqual(TruncatedVectorError.__doc__, "Vector ended before the declared length.")
        body = TruncatedVectorError("short", details={"length": 12}).to_dict(include_traceback=False)
        self.assertEqual(body, {"message": "short", "code": "TRUNCATED_VECTOR", "http_status": 422, "details": {"length": 12}})

    def test_cause_serialization(self) -> None:
        try:
            float("x")
        except ValueError as exc:
            err = ConfigurationError("bad env", cause=exc)
        full = err.to_dict()
        self.assertIn("cause_traceback", full)
        self.assertEqual(full["cause"], "could not convert string to float: 'x'")
        self.assertNotIn("cause_traceback", err.to_dict(include_traceback=False))
        self.assertIn("ConfigurationError(", repr(err))


class TestEmbeddingConfig(unittest.TestCase):
    def test_defaults(self) -> None:
        cfg = EmbeddingConfig()
        self.assertEqual(cfg.dimensions, 1536)
        self.assertEqual(cfg.suspicious_size_factor, 50)
        self.assertEqual(cfg.doubled_source_dimensions, 768)
        self.assertEqual(cfg.suspicious_size_limit, 1536 * 50)

    def test_from_env(self) -> None:
        env = {"EMBEDDING_DIMENSIONS": "768", "EMBEDDING_SUSPICIOUS_SIZE_FACTOR": "10"}
        with patch.dict(os.environ, env, clear=False):
            cfg = load_embedding_config()
        self.assertEqual(cfg.dimensions, 768)
        self.assertEqual(cfg.suspicious_size_factor, 10)

    def test_overrides_win_over_env(self) -> None:
        with patch.dict(os.environ, {"EMBEDDING_DIMENSIONS": "768"}, clear=False):
            cfg = EmbeddingConfig.from_env(dimensions=384)
        self.assertEqual(cfg.dimensions, 384)

    def test_blank_env_uses_default(self) -> None:
        with patch.dict(os.environ, {"EMBEDDING_DIMENSIONS": "  "}, clear=False):
            self.assertEqual(load_embedding_config().dimensions, 1536)

    def test_unparseable_env(self) -> None:
        with patch.dict(os.environ, {"EMBEDDING_DIMENSIONS": "lots"}, clear=False):
            with self.assertRaises(ConfigurationError) as ctx:
                load_embedding_config()
        self.assertEqual(ctx.exception.details["env_var"], "EMBEDDING_DIMENSIONS")

    def test_invalid_values(self) -> None:
        with self.assertRaises(ValueError):
            EmbeddingConfig(dimensions=0)
        with self.assertRaises(ValueError):
            EmbeddingConfig(suspicious_size_factor=1)
        with self.assertRaises(ValueError):
            EmbeddingConfig(unit_norm_tolerance=0.0)


class TestLogger(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.mkdtemp()

    def tearDown(self) -> None:
        configure(LoggerConfig(console=False, file_rotating=False))
        shutil.rmtree(self.tmp, ignore_errors=True)

    def test_json_file_carries_diagnostic_fields(self) -> None:
        configure(LoggerConfig(level="DEBUG", log_dir=self.tmp, log_file_basename="test", console=False))
        diag = LoggingDiagnostics(logging.getLogger("vectorguard.tests.diag"))
        diag.warning("parse.dimension_mismatch", "expected 3 dimensions, got 2", expected=3, observed=2)
        for handler in logging.getLogger("vectorguard").handlers:
            handler.flush()

        with open(os.path.join(self.tmp, "test.log"), encoding="utf-8") as fh:
            lines = [json.loads(line) for line in fh if line.strip()]
        self.assertEqual(len(lines), 1)
        record = lines[0]
        self.assertEqual(record["level"], "WARNING")
        self.assertEqual(record["logger"], "vectorguard.tests.diag")
        self.assertIn("expected 3 dimensions", record["message"])
        self.assertEqual(record["fields"], {"event": "parse.dimension_mismatch", "expected": 3, "observed": 2})

    def test_level_filters_debug(self) -> None:
        configure(LoggerConfig(level="INFO", log_dir=self.tmp, log_file_basename="quiet", console=False))
        LoggingDiagnostics(logging.getLogger("vectorguard.tests.quiet")).debug("parse.ok", "parsed")
        for handler in logging.getLogger("vectorguard").handlers:
            handler.flush()
        with open(os.path.join(self.tmp, "quiet.log"), encoding="utf-8") as fh:
            self.assertEqual(fh.read().strip(), "")

    def test_module_loggers_write_through_root(self) -> None:
        configure(LoggerConfig(level="INFO", log_dir=self.tmp, log_file_basename="svc", console=False))
        service = EmbeddingRepairService(EmbeddingConfig(dimensions=2), RecordingDiagnostics())
        service.repair_batch([EmbeddingRecord("r1", [1.0] * 200)])
        for handler in logging.getLogger("vectorguard").handlers:
            handler.flush()
        with open(os.path.join(self.tmp, "svc.log"), encoding="utf-8") as fh:
            records = [json.loads(line) for line in fh if line.strip()]
        flagged = [r for r in records if r["logger"] == "vectorguard.services.repair_service"]
        self.assertTrue(flagged)
        self.assertIn("r1", flagged[0]["message"])

    def test_reconfigure_replaces_handlers(self) -> None:
        configure(LoggerConfig(console=True, file_rotating=False))
        configure(LoggerConfig(console=True, file_rotating=False))
        self.assertEqual(len(logging.getLogger("vectorguard").handlers), 1)

    def test_config_from_env(self) -> None:
        with patch.dict(os.environ, {"LOG_LEVEL": "debug", "LOG_CONSOLE": "no"}, clear=False):
            cfg = LoggerConfig.from_env()
        self.assertEqual(cfg.level, "DEBUG")
        self.assertFalse(cfg.console)
        with self.assertRaises(ValueError):
            LoggerConfig(level="LOUD")

    def test_json_formatter_plain_record(self) -> None:
        record = logging.LogRecord("vectorguard.x", logging.INFO, __file__, 10, "hello %s", ("world",), None)
        out = json.loads(JsonFormatter().format(record))
        self.assertEqual(out["message"], "hello world")
        self.assertNotIn("fields", out)


if __name__ == "__main__":
    unittest.main()
