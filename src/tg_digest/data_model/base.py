"""Base class for every value object in the digest engine."""

from pydantic import BaseModel, ConfigDict


class StrictBaseModel(BaseModel):
    """Immutable model that rejects unknown keys.

    Posts, rankings, cards and tasks are shared between the ranker, the
    assembler and the renderer, so none of them may change after
    validation. Unknown keys in post exports or task JSON are errors.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")
