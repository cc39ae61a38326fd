from pydantic import BaseModel, Field
from typing import List, Optional

from docklite_agent.domain.database import DatabaseCredentials, DatabaseRecord


class DatabaseCreateRequest(BaseModel):
    name: str = Field(..., description="Database name; characters outside [A-Za-z0-9_] become _")
    username: str = Field("", description="Defaults to docklite")
    password: str = Field("", description="Generated when empty")
    port: Optional[int] = Field(None, description="Host port; omitted lets Docker choose")


class DatabaseResponse(BaseModel):
    id: str
    name: str
    port: int
    username: str
    password: str
    status: str = ""

    @classmethod
    def from_record(cls, record: DatabaseRecord) -> "DatabaseResponse":
        return cls(
            id=record.id,
            name=record.name,
            port=record.port,
            username=record.username,
            password=record.password,
            status=record.status,
        )


class DatabaseListResponse(BaseModel):
    databases: List[DatabaseResponse]


class ConnectionInfo(BaseModel):
    host: str = "localhost"
    port: int
    database: str
    username: str
    password: str


class DatabaseCreateResponse(BaseModel):
    database: DatabaseResponse
    connection: ConnectionInfo

    @classmethod
    def from_credentials(cls, creds: DatabaseCredentials) -> "DatabaseCreateResponse":
        return cls(
            database=DatabaseResponse(
                id=creds.id,
                name=creds.name,
                port=creds.port,
                username=creds.username,
                password=creds.password,
            ),
            connection=ConnectionInfo(
                port=creds.port,
                database=creds.name,
                username=creds.username,
                password=creds.password,
            ),
        )
