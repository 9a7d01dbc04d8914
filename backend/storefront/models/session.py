# backend/storefront/models/session.py
from pydantic import BaseModel, ConfigDict, Field


class Session(BaseModel):
    """The logged-in admin identity, persisted in the local session slot."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    username: str
    email: str = ""
    role: str = "admin"
    login_time: int = Field(alias="loginTime")  # epoch milliseconds
    token: str
    project_id: str = Field(alias="projectId")

    def is_expired(self, now_ms: int, timeout_ms: int) -> bool:
        return now_ms - self.login_time >= timeout_ms

    def is_valid(self, now_ms: int, timeout_ms: int, project_id: str) -> bool:
        return not self.is_expired(now_ms, timeout_ms) and self.project_id == project_id

    def to_storage(self) -> dict:
        return self.model_dump(by_alias=True)
