"""Publishing context shared by feed generation runs."""

import logging
import os
from datetime import datetime
from pathlib import Path

from castfeed.config import get_settings
from castfeed.content.models import Site
from castfeed.errors import OutputWriteFailure

logger = logging.getLogger(__name__)


class PublishingContext:
    """Site data and output location for one publishing run.

    Attributes:
        site: The website being published
        output_dir: Directory generated files are written under (defaults to
            the configured output_dir)
        last_generation_date: When the previous successful run finished, if known
    """

    def __init__(
        self,
        site: Site,
        output_dir: Path | str | None = None,
        last_generation_date: datetime | None = None,
    ):
        self.site = site
        if output_dir is None:
            output_dir = get_settings().output_dir
        self.output_dir = Path(output_dir)
        self.last_generation_date = last_generation_date

    def output_path(self, target_path: str) -> Path:
        """Get the output file path for a site-relative target path."""
        file_path = self.output_dir / target_path.lstrip("/")

        # Ensure we're not writing outside the output directory
        if not file_path.resolve().is_relative_to(self.output_dir.resolve()):
            raise ValueError(f"Invalid target path: {target_path}")

        return file_path

    async def write_output(self, target_path: str, text: str) -> Path:
        """
        Write a generated file, replacing any previous version atomically.

        The text is written to a temporary file next to the target and moved
        into place, so a failed write leaves the previous file untouched.

        Args:
            target_path: Site-relative path of the file
            text: File content

        Returns:
            Path of the written file

        Raises:
            OutputWriteFailure: If the file cannot be written
        """
        file_path = self.output_path(target_path)
        tmp_path = file_path.with_name(f".{file_path.name}.tmp")

        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(text, encoding="utf-8")
            os.replace(tmp_path, file_path)
        except OSError as e:
            if tmp_path.exists():
                tmp_path.unlink()
            raise OutputWriteFailure(f"Could not write output file {file_path}") from e

        logger.info(f"Wrote {file_path}")
        return file_path
