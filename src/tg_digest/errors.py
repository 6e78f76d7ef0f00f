"""Error types for the digest engine.

Every recoverable condition raised by the engine is a ``DigestError``
subclass so that the CLI boundary can report it uniformly. Contract
violations by the caller (negative sizes, unknown metric indexes) raise
``ValueError`` instead.
"""

from enum import Enum
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from tg_digest.ranker.metric import Metric


ErrorDetails = dict[str, str | int | bool | None]


class DigestErrorClass(str, Enum):
    """Classification of digest errors.

    - INPUT: Caller supplied invalid coordinates or indexes
    - SELECTION: The request selected nothing renderable
    - SOURCE: The post source could not provide the data
    - RENDER: Template lookup or rendering failed
    """

    INPUT = "INPUT"
    SELECTION = "SELECTION"
    SOURCE = "SOURCE"
    RENDER = "RENDER"


class DigestError(Exception):
    """Base exception for digest errors.

    Provides structured error information for logging and CLI reporting.
    """

    def __init__(
        self,
        error_class: DigestErrorClass,
        message: str,
        details: ErrorDetails | None = None,
    ) -> None:
        """Initialize the digest error.

        Args:
            error_class: Classification of the error.
            message: Human-readable error message.
            details: Additional structured error details.
        """
        super().__init__(message)
        self.error_class = error_class
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, str | ErrorDetails]:
        """Convert error to dictionary for logging/serialization.

        Returns:
            Dictionary representation of the error.
        """
        return {
            "error_class": self.error_class.value,
            "message": self.message,
            "details": self.details,
        }


class DateWindowError(DigestError):
    """Invalid calendar coordinates for a date window."""

    def __init__(self, message: str, **details: int | None) -> None:
        """Initialize the date window error.

        Args:
            message: Human-readable error message.
            **details: Offending calendar coordinates.
        """
        super().__init__(DigestErrorClass.INPUT, message, dict(details))


class CardIndexError(DigestError):
    """A card rank index lies outside ``[1, effective_k]``."""

    def __init__(self, metric: "Metric", index: int, upper: int) -> None:
        """Initialize the card index error.

        Args:
            metric: Metric whose index is out of range.
            index: The requested 1-based rank.
            upper: Largest valid rank.
        """
        self.metric = metric
        self.index = index
        self.upper = upper
        super().__init__(
            DigestErrorClass.INPUT,
            f"Index of {metric.value} ({index}) out of range [1;{upper}]",
            {"metric": metric.value, "index": index, "upper": upper},
        )


class NothingSelectedError(DigestError):
    """Cards mode produced no card at all."""

    def __init__(
        self,
        message: str = "Set at least one index of replies/reactions/forwards/views",
    ) -> None:
        """Initialize the error.

        Args:
            message: Human-readable error message.
        """
        super().__init__(DigestErrorClass.SELECTION, message)


class SourceError(DigestError):
    """Base class for post source failures."""

    def __init__(self, message: str, details: ErrorDetails | None = None) -> None:
        """Initialize the source error.

        Args:
            message: Human-readable error message.
            details: Additional structured error details.
        """
        super().__init__(DigestErrorClass.SOURCE, message, details)


class ChannelNotFoundError(SourceError):
    """The requested channel is unknown to the source."""

    def __init__(self, channel_name: str) -> None:
        """Initialize the error with the missing channel.

        Args:
            channel_name: Channel that could not be resolved.
        """
        self.channel_name = channel_name
        super().__init__(
            f"Can't find channel t.me/{channel_name}",
            {"channel_name": channel_name},
        )


class PostNotFoundError(SourceError):
    """The requested post does not exist in the channel."""

    def __init__(self, channel_name: str, post_id: int) -> None:
        """Initialize the error with the missing post.

        Args:
            channel_name: Channel that was searched.
            post_id: Post identifier that was not found.
        """
        self.channel_name = channel_name
        self.post_id = post_id
        super().__init__(
            f"Can't find post t.me/{channel_name}/{post_id}",
            {"channel_name": channel_name, "post_id": post_id},
        )


class SourceFormatError(SourceError):
    """Source data could not be parsed into post records."""


class RenderError(DigestError):
    """Template lookup or rendering failed."""

    def __init__(self, message: str, template: str | None = None) -> None:
        """Initialize the render error.

        Args:
            message: Human-readable error message.
            template: Template involved, if any.
        """
        self.template = template
        super().__init__(DigestErrorClass.RENDER, message, {"template": template})
