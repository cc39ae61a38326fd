from dataclasses import dataclass


@dataclass(frozen=True)
class ResourceSnapshot:
    cpu_usage: int
    system_usage: int
    online_cpus: int
    memory_usage: int
    memory_limit: int


@dataclass(frozen=True)
class UtilizationReport:
    cpu_percent: float
    memory_usage: int
    memory_limit: int
    memory_percent: float
