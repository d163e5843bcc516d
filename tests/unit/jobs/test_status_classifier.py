"""Classification of provider status payloads."""

from __future__ import annotations

import pytest

from mediagen.jobs.jobs_classifier import (
    classify_payload,
    classify_value,
    extract_fail_reason,
    has_result_evidence,
    unwrap_envelope,
)
from mediagen.jobs.jobs_models import JobState
from mediagen.jobs.jobs_strategies import QueuePollingStrategy, TaskPollingStrategy

pytestmark = pytest.mark.unit


@pytest.mark.parametrize("value", ["success", "Completed", "DONE", "finished", "succeeded", "ok"])
def test_success_vocabulary_is_case_insensitive(value: str) -> None:
    assert classify_value(value) is JobState.SUCCEEDED


@pytest.mark.parametrize("value", ["failed", "Error", "FAILURE", "cancelled", "aborted", "rejected"])
def test_failure_vocabulary(value: str) -> None:
    assert classify_value(value) is JobState.FAILED


@pytest.mark.parametrize("value", ["pending", "in progress", "IN_PROGRESS", "running", "queue", "active"])
def test_in_progress_vocabulary(value: str) -> None:
    assert classify_value(value) is JobState.IN_PROGRESS


def test_unrecognised_and_missing_values_are_unknown() -> None:
    assert classify_value("warming_up") is JobState.UNKNOWN
    assert classify_value(None) is JobState.UNKNOWN
    assert classify_value("") is JobState.UNKNOWN


def test_extra_vocabulary_extends_sets() -> None:
    assert classify_value("canceled") is JobState.UNKNOWN
    assert classify_value("canceled", extra_failure=frozenset({"CANCELED"})) is JobState.FAILED
    assert classify_value("in_queue", extra_in_progress=frozenset({"IN_QUEUE"})) is JobState.IN_PROGRESS


def test_task_result_url_counts_as_success_regardless_of_status() -> None:
    payload = {"task_status": "processing", "task_result": {"url": "https://cdn/x.png"}}

    status = classify_payload(payload)

    assert status.state is JobState.SUCCEEDED
    assert status.status_value == "processing"


def test_evidence_can_be_disabled() -> None:
    payload = {"status": "processing", "images": [{"url": "https://cdn/x.png"}]}

    assert classify_payload(payload, use_result_evidence=False).state is JobState.IN_PROGRESS
    assert classify_payload(payload).state is JobState.SUCCEEDED


def test_status_read_from_synonymous_fields() -> None:
    assert classify_payload({"taskStatus": "FAILED"}).state is JobState.FAILED
    assert classify_payload({"state": "running"}).state is JobState.IN_PROGRESS


def test_payload_without_status_or_evidence_is_unknown() -> None:
    status = classify_payload({"progress": 40})

    assert status.state is JobState.UNKNOWN
    assert status.status_value is None


def test_result_evidence_rules() -> None:
    assert has_result_evidence({"url": "https://cdn/x"})
    assert has_result_evidence({"image_urls": ["https://cdn/x"]})
    assert not has_result_evidence({"images": []})
    assert not has_result_evidence({"task_result": {"seed": 1}})


def test_fail_reason_priority_and_fallback() -> None:
    assert extract_fail_reason({"error": "bad", "fail_reason": "nsfw"}) == "nsfw"
    assert extract_fail_reason({"error": {"message": "quota exceeded"}}) == "quota exceeded"
    assert extract_fail_reason({"status": "FAILED"}) == "Unknown error"


def test_unwrap_envelope_only_for_mapping_data() -> None:
    assert unwrap_envelope({"data": {"task_id": "t1"}}) == {"task_id": "t1"}
    assert unwrap_envelope({"data": ["a"], "id": "x"}) == {"data": ["a"], "id": "x"}
    assert unwrap_envelope(["raw"]) == ["raw"]


def test_task_strategy_prefers_task_status_over_outer_status() -> None:
    strategy = TaskPollingStrategy(base_url="https://api.genbo.ai")

    status = strategy.classify({"status": "ok", "task_status": "FAILED", "fail_reason": "nsfw"})

    assert status.state is JobState.FAILED
    assert status.status_value == "FAILED"


def test_queue_strategy_reads_only_status_without_evidence() -> None:
    queue = QueuePollingStrategy(base_url="https://queue.fal.run")
    task = TaskPollingStrategy(base_url="https://api.genbo.ai")
    payload = {"task_status": "SUCCESS", "images": ["https://cdn/a.png"]}

    assert queue.classify(payload).state is JobState.UNKNOWN
    assert task.classify(payload).state is JobState.SUCCEEDED
