# src/hello_world/schemas.py

from typing import Any, TypedDict

from pydantic import BaseModel, ConfigDict, Field, field_validator

# --- Static Type Hinting (for mypy and IDEs) ---


class ProxyResponse(TypedDict):
    """The subset of the API Gateway proxy response this function returns."""

    statusCode: int
    body: str


class InputLogEvent(TypedDict):
    message: str
    timestamp: int


# --- Runtime Validation (using Pydantic) ---


class ConfigRecord(BaseModel):
    """
    Template parameters read from the YAML parameter file.

    The YAML keys are camelCase (``appName``); the template sees the
    PascalCase field names (``AppName``).
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        extra="ignore",
    )

    AppName: str = Field("", alias="appName")
    Version: str = Field("", alias="version")
    AppFullName: str = Field("", alias="appFullName")
    Client: str = Field("", alias="client")
    Env: str = Field("", alias="env")

    # A key with no value (`client:`) loads as None.
    @field_validator("AppName", "Version", "AppFullName", "Client", "Env", mode="before")
    @classmethod
    def blank_when_null(cls, value: Any) -> Any:
        return "" if value is None else value

    def to_template_context(self) -> dict[str, Any]:
        return self.model_dump(by_alias=False)


class LogEvent(BaseModel):
    """A single CloudWatch log event; timestamp is epoch milliseconds."""

    model_config = ConfigDict(frozen=True)

    message: str = Field(..., min_length=1)
    timestamp: int = Field(..., ge=0)

    def to_input_event(self) -> InputLogEvent:
        return {"message": self.message, "timestamp": self.timestamp}
