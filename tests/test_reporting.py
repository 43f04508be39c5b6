import io
import json

import pytest

from assetlib.reporting import (
    JsonLinesReporter,
    PlainReporter,
    TaskStatus,
    set_reporter,
    set_verbosity,
    task,
)


@pytest.fixture(autouse=True)
def _reset_verbosity():
    yield
    set_verbosity(0)


def test_plain_reporter_lines():
    out = io.StringIO()
    rep = PlainReporter(stream=out, use_color=False)
    rep.section("Build")
    rep.status("hello")
    rep.warning("careful")
    rep.error("broken")
    rep.verbose("hidden")
    set_verbosity(1)
    rep.verbose("shown")
    text = out.getvalue()
    assert "[Build]" in text
    assert "INFO: hello" in text
    assert "WARN: careful" in text
    assert "ERROR: broken" in text
    assert "hidden" not in text
    assert "VERB1: shown" in text


def test_plain_task_completion_line():
    out = io.StringIO()
    rep = PlainReporter(stream=out, use_color=False)
    rep.start_task("t", "Verify assets", total=2)
    rep.advance("t", current_item="a.itex")
    rep.advance("t")
    rep.end_task("t", TaskStatus.SUCCESS, files=2, issues=0)
    lines = out.getvalue().splitlines()
    assert "a.itex (1/2)" in lines[0]
    assert "item#2 (2/2)" in lines[1]
    assert lines[2].startswith(" ✔ Verify assets 2/2")
    assert "[files=2 issues=0]" in lines[2]


def test_jsonl_summary_events():
    out = io.StringIO()
    rep = JsonLinesReporter(stream=out)
    rep.status("Build summary: file=a.itex bytes=120")
    rep.status("plain message")
    events = [json.loads(line) for line in out.getvalue().splitlines()]
    assert events[0]["event"] == "summary"
    assert events[0]["summary_type"] == "build"
    assert events[0]["bytes"] == "120"
    assert events[1] == {"event": "status", "level": "info", "message": "Build summary: file=a.itex bytes=120"}
    assert events[2]["message"] == "plain message"
    assert len(events) == 3


def test_task_context_marks_failure():
    out = io.StringIO()
    rep = JsonLinesReporter(stream=out)
    set_reporter(rep)
    try:
        with pytest.raises(RuntimeError):
            with task("job", "Job"):
                raise RuntimeError("boom")
    finally:
        set_reporter(PlainReporter(stream=io.StringIO()))
    events = [json.loads(line) for line in out.getvalue().splitlines()]
    assert events[-1]["event"] == "task_end"
    assert events[-1]["status"] == "failed"


def test_jsonl_summary_ignores_reserved_keys():
    out = io.StringIO()
    rep = JsonLinesReporter(stream=out)
    rep.status("Build summary: file=my event=x.itex raw=1 type=ITEX")
    events = [json.loads(line) for line in out.getvalue().splitlines()]
    assert [e["event"] for e in events] == ["summary", "status"]
    assert events[0]["type"] == "ITEX"
    assert events[0]["summary_type"] == "build"
    assert events[0]["raw"] == "Build summary: file=my event=x.itex raw=1 type=ITEX"
