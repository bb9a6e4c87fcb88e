"""Quiniela service — validate, build and hand off a new quiniela.

The creation endpoint itself is an external collaborator: anything with a
``create(payload) -> dict`` method. Its failures are not interpreted here;
they propagate to the caller as raised.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Protocol

from quiniela.services.draft_validator import DraftValidator, FieldError, ValidationResult
from quiniela.services.drafts import QuinielaDraft
from quiniela.services.instants import Clock, system_clock
from quiniela.services.submission import QuinielaSubmission, build_submission

logger = logging.getLogger(__name__)


class QuinielaError(Exception):
    """Quiniela service error with HTTP status hint."""

    def __init__(self, detail: str, status_code: int = 400) -> None:
        self.detail = detail
        self.status_code = status_code
        super().__init__(detail)


class DraftValidationError(QuinielaError):
    """The draft failed validation; ``errors`` keeps the reported order."""

    def __init__(self, errors: tuple[FieldError, ...]) -> None:
        self.errors = errors
        fields = ", ".join(dict.fromkeys(e.field for e in errors))
        super().__init__(f"Draft has {len(errors)} validation error(s): {fields}", 422)


class QuinielaCreator(Protocol):
    """Outbound creation collaborator."""

    def create(self, payload: dict[str, Any]) -> dict[str, Any]: ...


@dataclass(frozen=True)
class CreatedQuiniela:
    """Acknowledgment returned by the creation collaborator."""

    name: str
    invitation_code: str
    quiniela_id: Any = None

    @classmethod
    def from_ack(cls, ack: dict[str, Any]) -> CreatedQuiniela:
        name = ack.get("name")
        code = ack.get("invitationCode")
        if not name or not code:
            raise QuinielaError(
                "Creation acknowledgment is missing name or invitation code",
                status_code=502,
            )
        return cls(name=name, invitation_code=code, quiniela_id=ack.get("id"))


class QuinielaService:
    """Runs the draft → submission → creation flow."""

    def __init__(
        self,
        creator: QuinielaCreator | None = None,
        clock: Clock = system_clock,
    ) -> None:
        self.creator = creator
        self.clock = clock
        self.validator = DraftValidator()

    def validate(self, draft: QuinielaDraft) -> ValidationResult:
        """Validate *draft* against the current clock reading."""
        return self.validator.validate(draft, self.clock())

    def preview(self, draft: QuinielaDraft) -> QuinielaSubmission:
        """Validate and build without creating anything."""
        result = self.validate(draft)
        if not result.ok or result.draft is None:
            logger.warning(
                "Quiniela draft rejected: %s",
                ", ".join(result.error_fields),
            )
            raise DraftValidationError(result.errors)
        return build_submission(result.draft)

    def create(self, draft: QuinielaDraft) -> CreatedQuiniela:
        """Validate, build and submit *draft* to the creation collaborator."""
        if self.creator is None:
            raise QuinielaError("No quiniela creator configured", status_code=503)

        submission = self.preview(draft)
        ack = self.creator.create(submission.to_payload())
        created = CreatedQuiniela.from_ack(ack)
        logger.info(
            "Quiniela created: %s (invitation code %s)",
            created.name,
            created.invitation_code,
        )
        return created
