import pytest

from docklite_agent.domain.metrics import ResourceSnapshot
from docklite_agent.services.metrics import decode_utilization, snapshots_from_stats


def snap(cpu=0, system=0, cores=4, usage=0, limit=0):
    return ResourceSnapshot(
        cpu_usage=cpu,
        system_usage=system,
        online_cpus=cores,
        memory_usage=usage,
        memory_limit=limit,
    )


def test_cpu_percent_scales_by_cores():
    report = decode_utilization(snap(cpu=1_000, system=10_000), snap(cpu=1_500, system=12_000))
    # 500 / 2000 * 4 * 100
    assert report.cpu_percent == pytest.approx(100.0)


@pytest.mark.parametrize(
    "prev, curr",
    [
        (snap(cpu=100, system=1_000), snap(cpu=100, system=2_000)),  # idle
        (snap(cpu=200, system=1_000), snap(cpu=100, system=2_000)),  # usage went backwards
        (snap(cpu=100, system=2_000), snap(cpu=200, system=2_000)),  # no system delta
        (snap(cpu=100, system=3_000), snap(cpu=200, system=2_000)),  # clock skew
        (snap(), snap()),  # first sample
    ],
)
def test_cpu_percent_is_zero_for_non_positive_deltas(prev, curr):
    assert decode_utilization(prev, curr).cpu_percent == 0.0


@pytest.mark.parametrize(
    "prev_cpu, cpu, prev_system, system",
    [
        (0, 1, 0, 1_000_000),
        (10, 500, 1_000, 2_000),
        (0, 1_000, 0, 1_000),
        (0, 5_000, 0, 1_000),  # usage delta larger than system delta
    ],
)
def test_cpu_percent_is_bounded_by_core_count(prev_cpu, cpu, prev_system, system):
    report = decode_utilization(
        snap(cpu=prev_cpu, system=prev_system, cores=2),
        snap(cpu=cpu, system=system, cores=2),
    )
    assert 0.0 <= report.cpu_percent <= 200.0


def test_memory_percent_zero_without_limit():
    report = decode_utilization(snap(usage=512), snap(usage=4_096, limit=0))
    assert report.memory_percent == 0.0
    assert report.memory_usage == 4_096


def test_memory_percent():
    report = decode_utilization(snap(), snap(usage=50, limit=200))
    assert report.memory_percent == pytest.approx(25.0)


def test_snapshots_from_stats_prefers_percpu_length():
    stats = {
        "precpu_stats": {"cpu_usage": {"total_usage": 10}, "system_cpu_usage": 100},
        "cpu_stats": {
            "cpu_usage": {"total_usage": 20, "percpu_usage": [5, 5, 5]},
            "system_cpu_usage": 200,
            "online_cpus": 8,
        },
        "memory_stats": {"usage": 10, "limit": 100},
    }

    prev, curr = snapshots_from_stats(stats)

    assert curr.online_cpus == 3
    assert prev.cpu_usage == 10 and curr.cpu_usage == 20
    assert curr.memory_limit == 100


def test_snapshots_from_stats_tolerates_missing_sections():
    prev, curr = snapshots_from_stats({"cpu_stats": {}, "memory_stats": None})

    report = decode_utilization(prev, curr)

    assert curr.online_cpus == 1
    assert report.cpu_percent == 0.0
    assert report.memory_percent == 0.0
