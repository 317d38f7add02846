import pytest

from batch_scheduler.config import WaitModel
from batch_scheduler.metrics import accumulate_timeline, build_report, elapsed_rows, summarize_rows
from batch_scheduler.models import Process, RunInterval


def test_accumulate_waits_on_service_clock():
    rows, timeline = accumulate_timeline(
        [
            Process("A", arrival_time=0, burst_time=4, priority=2),
            Process("B", arrival_time=1, burst_time=3),
            Process("C", arrival_time=2, burst_time=1),
        ]
    )
    assert [r.waiting_time for r in rows] == [0, 3, 5]
    assert [r.turnaround_time for r in rows] == [4, 6, 6]
    assert [r.completion_time for r in rows] == [4, 7, 8]
    assert rows[0].priority == 2
    assert [(s.start_time, s.end_time) for s in timeline] == [(0, 4), (4, 7), (7, 8)]


def test_accumulate_idles_for_late_arrival():
    rows, timeline = accumulate_timeline(
        [
            Process("A", arrival_time=0, burst_time=2),
            Process("B", arrival_time=6, burst_time=2),
            Process("C", arrival_time=6, burst_time=1),
        ]
    )
    assert [r.waiting_time for r in rows] == [0, 0, 2]
    assert [(s.start_time, s.end_time) for s in timeline] == [(0, 2), (6, 8), (8, 9)]


def test_summarize_rows():
    rows, _ = accumulate_timeline(
        [
            Process("1", arrival_time=0, burst_time=24),
            Process("2", arrival_time=0, burst_time=3),
            Process("3", arrival_time=0, burst_time=3),
        ]
    )
    avg = summarize_rows(rows)
    assert avg.avg_waiting == 17.0
    assert avg.avg_turnaround == 27.0
    assert avg.throughput == pytest.approx(3 / 30)


def test_summarize_empty_is_none():
    assert summarize_rows([]) is None


def test_elapsed_rows():
    rows = elapsed_rows([(Process("A", arrival_time=2, burst_time=3), 9)])
    assert rows[0].turnaround_time == 7
    assert rows[0].waiting_time == 4


def test_build_report_accepts_wait_model_string():
    p = Process("A", arrival_time=0, burst_time=2)
    dispatches = [RunInterval("A", 0, 2)]
    report = build_report("X", "title", [(p, 2)], dispatches, wait_model="elapsed")
    assert report.wait_model is WaitModel.ELAPSED
    assert report.timeline == dispatches
    assert report.averages.throughput == 0.5
