"""
Utilization derived from resource-accounting snapshots.

Docker reports cumulative CPU ticks, so a percentage needs two readings: the
share of system ticks the container consumed between them, scaled by the
number of cores. A one-shot stats document carries both readings
(precpu_stats and cpu_stats).
"""
from typing import Any, Mapping, Tuple

from docklite_agent.domain.metrics import ResourceSnapshot, UtilizationReport


def _int(value: Any) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


def _core_count(cpu_stats: Mapping[str, Any]) -> int:
    percpu = (cpu_stats.get("cpu_usage") or {}).get("percpu_usage") or []
    if percpu:
        return len(percpu)
    # cgroup v2 hosts do not report per-core usage
    return _int(cpu_stats.get("online_cpus")) or 1


def snapshot_from_stats(cpu_stats: Mapping[str, Any] | None, memory_stats: Mapping[str, Any] | None) -> ResourceSnapshot:
    cpu_stats = cpu_stats or {}
    memory_stats = memory_stats or {}
    return ResourceSnapshot(
        cpu_usage=_int((cpu_stats.get("cpu_usage") or {}).get("total_usage")),
        system_usage=_int(cpu_stats.get("system_cpu_usage")),
        online_cpus=_core_count(cpu_stats),
        memory_usage=_int(memory_stats.get("usage")),
        memory_limit=_int(memory_stats.get("limit")),
    )


def snapshots_from_stats(stats: Mapping[str, Any]) -> Tuple[ResourceSnapshot, ResourceSnapshot]:
    """Split one stats document into its (previous, current) snapshots."""
    memory = stats.get("memory_stats")
    return (
        snapshot_from_stats(stats.get("precpu_stats"), memory),
        snapshot_from_stats(stats.get("cpu_stats"), memory),
    )


def decode_utilization(prev: ResourceSnapshot, curr: ResourceSnapshot) -> UtilizationReport:
    """
    Turn two chronologically ordered snapshots into percentages.

    Never raises. CPU is 0 when either delta is not positive (first sample,
    clock skew) and never above 100% per core; memory is 0 when no limit is
    set.
    """
    cpu_delta = curr.cpu_usage - prev.cpu_usage
    system_delta = curr.system_usage - prev.system_usage
    cpu_percent = 0.0
    if cpu_delta > 0 and system_delta > 0:
        ceiling = curr.online_cpus * 100.0
        cpu_percent = min(cpu_delta / system_delta * ceiling, ceiling)

    memory_percent = 0.0
    if curr.memory_limit > 0:
        memory_percent = curr.memory_usage / curr.memory_limit * 100.0

    return UtilizationReport(
        cpu_percent=cpu_percent,
        memory_usage=curr.memory_usage,
        memory_limit=curr.memory_limit,
        memory_percent=memory_percent,
    )
