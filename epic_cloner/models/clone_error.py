"""Defines the exception raised when an epic clone fails."""

from typing import Any

from epic_cloner.type_definitions import CloneStage


class EpicCloneError(Exception):
    """Raised by the clone orchestrator when any Jira call fails.

    Nothing is rolled back, so the exception records what already exists in
    Jira when the failure happened.
    """

    def __init__(
        self,
        message: str,
        *,
        stage: CloneStage,
        details: Any = None,
        new_epic_key: str | None = None,
        created_children: list[str] | None = None,
    ) -> None:
        """Initialize the exception with a descriptive message.

        Args:
            message: Detailed error message
            stage: Workflow step that failed
            details: Provider error payload, or the message when there is none
            new_epic_key: Key of the epic created before the failure, if any
            created_children: Child keys created before the failure

        """
        super().__init__(message)
        self.message = message
        self.stage = stage
        self.details = details if details is not None else message
        self.new_epic_key = new_epic_key
        self.created_children = list(created_children or [])

    @property
    def left_partial_state(self) -> bool:
        """True when the failure left newly created issues behind in Jira."""
        return self.new_epic_key is not None
