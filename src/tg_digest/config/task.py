"""Task model describing a single digest request."""

import uuid
from datetime import UTC, datetime, timedelta
from typing import Annotated, Literal

from pydantic import Field, model_validator

from tg_digest.assembler.models import CardIndices
from tg_digest.config.constants import (
    DEFAULT_EDITOR_CHOICE_POST_ID,
    DEFAULT_LOOKBACK_DAYS,
    DEFAULT_TOP_COUNT,
)
from tg_digest.data_model.base import StrictBaseModel
from tg_digest.window.resolver import DateWindow


class DigestCommand(StrictBaseModel):
    """Render the grouped top-K digest page."""

    kind: Literal["digest"] = "digest"


class CardsCommand(StrictBaseModel):
    """Render "best of" cards for the chosen ranks (1..top_count)."""

    kind: Literal["cards"] = "cards"
    indices: CardIndices = Field(default_factory=CardIndices)


class PostCommand(StrictBaseModel):
    """Render the editor choice post page."""

    kind: Literal["post"] = "post"


Command = Annotated[
    DigestCommand | CardsCommand | PostCommand, Field(discriminator="kind")
]


def _new_task_id() -> str:
    return uuid.uuid4().hex


class Task(StrictBaseModel):
    """Parameters of one digest, cards or post request.

    Attributes:
        command: What to render.
        channel_name: Channel name (t.me/<channel_name>).
        top_count: Number of posts per metric.
        mode: Template folder name under the templates directory.
        editor_choice_post_id: Post shown in the editor choice block.
        from_date: Inclusive window start, UTC seconds.
        to_date: Exclusive window end, UTC seconds.
        task_id: Unique task identifier.
    """

    command: Command = Field(default_factory=DigestCommand)
    channel_name: Annotated[str, Field(min_length=1)]
    top_count: Annotated[int, Field(ge=1)] = DEFAULT_TOP_COUNT
    mode: Annotated[str, Field(min_length=1)]
    editor_choice_post_id: int = DEFAULT_EDITOR_CHOICE_POST_ID
    from_date: int
    to_date: int
    task_id: str = Field(default_factory=_new_task_id)

    @model_validator(mode="after")
    def _check_window(self) -> "Task":
        if self.from_date > self.to_date:
            raise ValueError(
                f"from_date ({self.from_date}) is after to_date ({self.to_date})"
            )
        return self

    @property
    def window(self) -> DateWindow:
        """The task's ``[from_date, to_date)`` window."""
        return DateWindow(from_ts=self.from_date, to_ts=self.to_date)

    @classmethod
    def default(
        cls,
        channel_name: str,
        mode: str,
        command: DigestCommand | CardsCommand | PostCommand | None = None,
        now: datetime | None = None,
    ) -> "Task":
        """Create a task covering the last week.

        Args:
            channel_name: Channel name.
            mode: Template folder name.
            command: Command to run, digest by default.
            now: Current time, defaults to the wall clock.

        Returns:
            Task with default top count and editor choice.
        """
        current = (now or datetime.now(UTC)).replace(microsecond=0)
        week_ago = current - timedelta(days=DEFAULT_LOOKBACK_DAYS)
        return cls(
            command=command or DigestCommand(),
            channel_name=channel_name,
            mode=mode,
            from_date=int(week_ago.timestamp()),
            to_date=int(current.timestamp()),
        )

    @classmethod
    def from_json(cls, data: str | bytes) -> "Task":
        """Parse a task from its JSON form.

        Raises:
            pydantic.ValidationError: If the JSON does not describe a task.
        """
        return cls.model_validate_json(data)

    def to_json(self) -> str:
        """Serialize the task to JSON."""
        return self.model_dump_json()
