import pytest

from srtf_sim.engine import simulate
from srtf_sim.errors import ConfigurationError
from srtf_sim.metrics import compute_process_metrics, cpu_utilization, summarize_process_metrics
from srtf_sim.models import Process
from srtf_sim.process_set import ProcessSet


def test_turnaround_and_waiting_identities():
    res = simulate(
        [
            Process("P1", arrival_time=0, burst_time=7),
            Process("P2", arrival_time=2, burst_time=4),
            Process("P3", arrival_time=4, burst_time=1),
            Process("P4", arrival_time=5, burst_time=4),
        ]
    )
    for p in res.processes:
        assert p.turnaround_time == p.completion_time - p.arrival_time
        assert p.waiting_time == p.turnaround_time - p.burst_time
        assert p.response_time == p.start_time - p.arrival_time


def test_unfinished_processes_are_skipped():
    ps = ProcessSet.from_processes(
        [
            Process("P1", arrival_time=0, burst_time=3, completion_time=3),
            Process("P2", arrival_time=0, burst_time=3),
        ]
    )
    rows = compute_process_metrics(ps)
    assert [r.pid for r in rows] == ["P1"]


def test_average_over_nothing_is_configuration_error():
    ps = ProcessSet.from_processes([Process("P1", arrival_time=0, burst_time=3)])
    with pytest.raises(ConfigurationError):
        summarize_process_metrics(compute_process_metrics(ps))


def test_cpu_utilization_counts_idle_time():
    res = simulate([Process("P1", arrival_time=2, burst_time=6)])
    assert cpu_utilization(res.timeline) == pytest.approx(0.75)
    assert cpu_utilization(()) == 0.0
