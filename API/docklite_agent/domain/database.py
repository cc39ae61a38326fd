from dataclasses import dataclass, field


@dataclass
class DatabaseSpec:
    name: str
    username: str
    password: str = field(repr=False)
    port: int = 0  # 0 lets the engine choose


@dataclass
class DatabaseCredentials:
    """Result of a create: port 0 means the host port is not known yet."""
    id: str
    name: str
    port: int
    username: str
    password: str = field(repr=False)


@dataclass
class DatabaseRecord:
    id: str
    name: str
    port: int
    username: str
    password: str = field(repr=False)
    status: str = ""
