import json
import logging

import pytest

from mediagen.logging import build_formatter

pytestmark = pytest.mark.unit


def test_stdlib_extra_is_rendered_as_json_fields():
    record = logging.getLogger("mediagen.jobs.jobs_runner").makeRecord(
        "mediagen.jobs.jobs_runner",
        logging.INFO,
        __file__,
        10,
        "jobs.async.submitted",
        (),
        None,
        extra={"provider": "genbo", "token": "t-1"},
    )

    line = json.loads(build_formatter().format(record))

    assert line["event"] == "jobs.async.submitted"
    assert line["provider"] == "genbo"
    assert line["token"] == "t-1"
    assert line["level"] == "info"
    assert line["logger"] == "mediagen.jobs.jobs_runner"
    assert "timestamp" in line


def test_printf_style_messages_are_interpolated():
    record = logging.getLogger("mediagen.providers").makeRecord(
        "mediagen.providers",
        logging.ERROR,
        __file__,
        20,
        "provider.response.error status=%s detail=%s",
        (401, "Invalid API key"),
        None,
        extra={"http_status": 401},
    )

    line = json.loads(build_formatter().format(record))

    assert line["event"] == "provider.response.error status=401 detail=Invalid API key"
    assert line["http_status"] == 401
    assert line["level"] == "error"
