from pathlib import Path
from typing import List, Union

from loguru import logger


class InputUnavailableError(Exception):
    """Raised when the chat export cannot be read. Fatal for the whole run."""

    pass


def load_chat_lines(path: Union[str, Path], encoding: str = "utf-8") -> List[str]:
    """Reads a chat export and returns its lines in order."""
    chat_path = Path(path)
    logger.info(f"Reading chat export: {chat_path}")
    try:
        text = chat_path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Could not read chat export {chat_path}: {e}")
        raise InputUnavailableError(f"Cannot read chat export {chat_path}: {e}") from e

    lines = text.split("\n")
    logger.debug(f"Read {len(lines)} lines from {chat_path}")
    return lines
