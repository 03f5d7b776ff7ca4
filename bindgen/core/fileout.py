"""
Output sink that only touches files whose content changed.
"""

import io
from pathlib import Path
from typing import Union

from ..logging_config import get_logger

logger = get_logger(__name__)


def verify_directory_for(path: Path) -> bool:
    """Create the parent directory of path if needed."""
    directory = path.parent
    if directory.exists():
        return True
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.warning("unable to create directory '%s': %s", directory.absolute(), e)
        return False
    return True


class FileOut:
    """
    Buffers generated text for one file.

    Code is written to ``stream``; done() compares the buffer with what is
    on disk and writes only when they differ.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self.stream = io.StringIO()
        self._done = False

    def done(self) -> bool:
        """
        Flush the buffer to disk.

        Returns:
            True if the file was created or its content changed
        """
        if self._done:
            return False
        self._done = True

        content = self.stream.getvalue()
        if self.path.exists():
            try:
                if self.path.read_text(encoding="utf-8") == content:
                    logger.debug("unchanged: %s", self.path)
                    return False
            except (OSError, UnicodeDecodeError) as e:
                logger.debug("rewriting unreadable file %s: %s", self.path, e)

        if not verify_directory_for(self.path):
            return False

        try:
            with open(self.path, "w", encoding="utf-8", newline="\n") as f:
                f.write(content)
        except OSError as e:
            logger.warning("failed to write '%s': %s", self.path, e)
            return False
        return True
