"""Request and result models for the clone operation."""

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

REQUIRED_REQUEST_FIELDS = ("templateEpicKey", "targetProjectKey", "newEpicSummary")


class CloneEpicRequest(BaseModel):
    """Body of ``POST /clone-epic``."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    template_epic_key: NonEmptyStr = Field(alias="templateEpicKey")
    target_project_key: NonEmptyStr = Field(alias="targetProjectKey")
    new_epic_summary: NonEmptyStr = Field(alias="newEpicSummary")


class CloneResult(BaseModel):
    """Outcome of a successful clone; also the 200 response body."""

    model_config = ConfigDict(populate_by_name=True)

    ok: bool = True
    new_epic_key: str = Field(alias="newEpicKey")
    created_children: list[str] = Field(default_factory=list, alias="createdChildren")

    def to_response(self) -> dict[str, Any]:
        """Serialize using the camelCase wire names."""
        return self.model_dump(by_alias=True)


class ErrorResponse(BaseModel):
    """Body of 400 and 500 responses."""

    error: str
    details: Any = None

    def to_response(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)
