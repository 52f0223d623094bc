"""Tests for EmbeddingRepairService batch validation and repair."""
from __future__ import annotations

import math
import unittest

from vectorguard.config import EmbeddingConfig
from vectorguard.embeddings import RecordingDiagnostics
from vectorguard.services import EmbeddingRecord, EmbeddingRepairService, RecordStatus


def _svc(dimensions: int = 4) -> tuple[EmbeddingRepairService, RecordingDiagnostics]:
    diag = RecordingDiagnostics()
    return EmbeddingRepairService(EmbeddingConfig(dimensions=dimensions), diag), diag


class TestValidateBatch(unittest.TestCase):
    def test_statuses_and_stats(self) -> None:
        svc, diag = _svc(3)
        records = [
            EmbeddingRecord("r1", [0.1, 0.2, 0.3]),
            EmbeddingRecord("r2", "[0.1,0.2,0.3]"),
            EmbeddingRecord("r3", [0.1, "abc", 0.3]),
            EmbeddingRecord("r4", [0.1, 0.2]),
            EmbeddingRecord("r5", None),
        ]
        report = svc.validate_batch(records)
        statuses = [r.status for r in report.results]
        self.assertEqual(
            statuses,
            [RecordStatus.VALID, RecordStatus.VALID, RecordStatus.INVALID, RecordStatus.INVALID, RecordStatus.SKIPPED],
        )
        self.assertEqual(report.stats.total_processed, 4)
        self.assertEqual(report.stats.valid_vectors, 2)
        self.assertEqual(report.stats.invalid_vectors, 2)
        self.assertEqual(report.stats.skipped_vectors, 1)
        self.assertEqual(report.summary["success_rate"], "50.00%")
        self.assertEqual(len(diag.of("batch.stats")), 1)

    def test_explicit_dimensions(self) -> None:
        svc, _ = _svc(3)
        report = svc.validate_batch([EmbeddingRecord("r1", [1, 2])], expected_dimensions=2)
        self.assertIs(report.results[0].status, RecordStatus.VALID)
        self.assertEqual(report.results[0].vector, [1.0, 2.0])

    def test_does_not_reshape(self) -> None:
        svc, _ = _svc(4)
        report = svc.validate_batch([EmbeddingRecord("r1", [1.0] * 8)])
        self.assertIs(report.results[0].status, RecordStatus.INVALID)
        self.assertIsNone(report.results[0].vector)


class TestRepairBatch(unittest.TestCase):
    def test_mixed_batch_continues_past_corruption(self) -> None:
        svc, _ = _svc(4)
        records = [
            EmbeddingRecord("ok", [1.0, 1.0, 1.0, 1.0]),
            EmbeddingRecord("short", "[3,4]"),
            EmbeddingRecord("double", [2.0] * 8),
            EmbeddingRecord("garbage", "not a vector"),
            EmbeddingRecord("huge", [0.1] * 201),
            EmbeddingRecord("nan", [1.0, float("nan")]),
            EmbeddingRecord("missing", None),
        ]
        report = svc.repair_batch(records)
        by_id = {r.record_id: r for r in report.results}

        self.assertIs(by_id["ok"].status, RecordStatus.VALID)
        self.assertIs(by_id["short"].status, RecordStatus.REPAIRED)
        self.assertIs(by_id["double"].status, RecordStatus.REPAIRED)
        self.assertIs(by_id["garbage"].status, RecordStatus.INVALID)
        self.assertIs(by_id["huge"].status, RecordStatus.NEEDS_REVIEW)
        self.assertIs(by_id["nan"].status, RecordStatus.NEEDS_REVIEW)
        self.assertIs(by_id["missing"].status, RecordStatus.SKIPPED)

        self.assertEqual(by_id["huge"].error["code"], "SUSPICIOUS_SIZE")
        self.assertEqual(by_id["nan"].error["code"], "NON_FINITE_INPUT")
        self.assertNotIn("cause_traceback", by_id["huge"].error)

        for key in ("ok", "short", "double"):
            vec = by_id[key].vector
            self.assertEqual(len(vec), 4)
            self.assertAlmostEqual(math.sqrt(sum(v * v for v in vec)), 1.0, delta=1e-6)

        self.assertEqual(report.needs_review, 2)
        self.assertEqual(report.stats.total_processed, 6)
        self.assertEqual(report.stats.valid_vectors, 3)
        self.assertEqual(report.stats.invalid_vectors, 3)
        self.assertEqual(report.stats.skipped_vectors, 1)

    def test_report_dict(self) -> None:
        svc, _ = _svc(2)
        report = svc.repair_batch([EmbeddingRecord("a", [3.0, 4.0]), EmbeddingRecord("b", [])])
        data = report.to_dict(include_vectors=True)
        self.assertEqual(data["mode"], "repair")
        self.assertEqual(data["counts"]["valid"], 1)
        self.assertEqual(data["counts"]["invalid"], 1)
        self.assertEqual(data["results"][0]["vector"], [0.6, 0.8])
        self.assertNotIn("vector", report.to_dict()["results"][0])

    def test_each_call_has_fresh_stats(self) -> None:
        svc, _ = _svc(2)
        first = svc.repair_batch([EmbeddingRecord("a", [1.0, 0.0])])
        second = svc.repair_batch([EmbeddingRecord("b", [1.0, 0.0]), EmbeddingRecord("c", [0.0, 1.0])])
        self.assertEqual(first.stats.total_processed, 1)
        self.assertEqual(second.stats.total_processed, 2)


if __name__ == "__main__":
    unittest.main()
