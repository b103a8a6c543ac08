"""Output file path management."""

from pathlib import Path
from datetime import datetime
from typing import Optional

from ..config.settings import settings


def default_output_path(
    stem: str = "consort",
    suffix: str = ".png",
    timestamp: Optional[datetime] = None,
) -> Path:
    if timestamp is None:
        timestamp = datetime.now()
    dirpath = settings.output_dir
    dirpath.mkdir(parents=True, exist_ok=True)
    return dirpath / f"{stem}_{timestamp.strftime('%Y%m%d_%H%M%S')}{suffix}"
