"""Application configuration schema."""

from pathlib import Path

from pydantic import Field

from tg_digest.data_model.base import StrictBaseModel


class AppConfig(StrictBaseModel):
    """Paths used by one digest installation.

    Attributes:
        input_dir: Directory holding ``<mode>/`` template folders; the
            packaged templates are used when unset.
        output_dir: Directory rendered files are written to.
        posts_dir: Directory with exported channel post files.
    """

    input_dir: Path | None = Field(default=None)
    output_dir: Path
    posts_dir: Path

    def resolved(self, base_dir: Path) -> "AppConfig":
        """Resolve relative paths against a base directory.

        Args:
            base_dir: Directory relative paths are anchored to.

        Returns:
            Copy of the config with absolute paths.
        """
        return self.model_copy(
            update={
                "input_dir": base_dir / self.input_dir if self.input_dir else None,
                "output_dir": base_dir / self.output_dir,
                "posts_dir": base_dir / self.posts_dir,
            }
        )
