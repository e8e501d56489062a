from collections.abc import Iterator
from enum import StrEnum
from typing import Any

from loguru import logger
from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)


class RebaseAction(StrEnum):
    """The kind of a planned rebase step."""

    PICK = "Pick"
    EDIT = "Edit"
    REWORD = "Reword"
    SQUASH = "Squash"
    FIXUP = "Fixup"
    DROP = "Drop"

    @classmethod
    def parse(cls, value: Any) -> "RebaseAction":
        """
        Convert a serialized action into a RebaseAction.

        Names match case-insensitively and integers are read as member
        ordinals, which is how the host serializer writes them. Any other
        value is a drop.
        """
        if isinstance(value, cls):
            return value
        members = list(cls)
        if isinstance(value, int) and not isinstance(value, bool):
            if 0 <= value < len(members):
                return members[value]
        elif isinstance(value, str):
            name = value.strip().lower()
            for member in members:
                if member.value.lower() == name:
                    return member
        logger.warning(f"Unknown rebase action {value!r}, treating as drop")
        return cls.DROP


class Job(BaseModel):
    """One planned rebase step."""

    model_config = ConfigDict(frozen=True)

    action: RebaseAction
    commit_id: str = Field(
        ...,
        min_length=1,
        validation_alias=AliasChoices("commitId", "commit_id", "sha", "SHA"),
        serialization_alias="commitId",
    )
    message: str = ""

    @field_validator("action", mode="before")
    @classmethod
    def _parse_action(cls, value: Any) -> RebaseAction:
        return RebaseAction.parse(value)

    @field_validator("message", mode="before")
    @classmethod
    def _null_message(cls, value: Any) -> Any:
        return "" if value is None else value


class JobPlan(BaseModel):
    """Jobs in rebase execution order."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    jobs: tuple[Job, ...] = Field(...)

    @model_validator(mode="before")
    @classmethod
    def _wrap_bare_list(cls, data: Any) -> Any:
        if isinstance(data, list):
            return {"jobs": data}
        return data

    def __len__(self) -> int:
        return len(self.jobs)

    def __getitem__(self, index: int) -> Job:
        return self.jobs[index]

    def __iter__(self) -> Iterator[Job]:  # type: ignore[override]
        return iter(self.jobs)


class EditorOutcome(StrEnum):
    """The result of a recognized editor callback."""

    WRITTEN = "written"
    DECLINED = "declined"
