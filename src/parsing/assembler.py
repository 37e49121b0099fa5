import re
from typing import Iterable, List, Optional, Pattern, Tuple

from loguru import logger

from src.models.message import RawMessage

_HEADER_PREFIX = r"^\[(\d{1,2}/\d{1,2}/\d{2,4}),\s*(\d{1,2}:\d{2}:\d{2}\s*[ap]\.\s*m\.)\]\s*"

# "[25/07/25, 12:13:12 p. m.] Alex: Pichanga viernes"
MESSAGE_PATTERN = re.compile(_HEADER_PREFIX + r"([^:]+):\s*(.*)")
# "[25/07/25, 12:13:12 p. m.] Alex: \u200eimage omitted"
SYSTEM_PATTERN = re.compile(_HEADER_PREFIX + r"([^:]*?):\s*\u200e(.*)$")

DEFAULT_HEADER_PATTERNS: Tuple[Pattern[str], ...] = (MESSAGE_PATTERN, SYSTEM_PATTERN)


class _MessageBuffer:
    """Accumulates the lines of the message currently being read."""

    def __init__(self, timestamp: str, sender: str, content: str, raw_text: str):
        self.timestamp = timestamp
        self.sender = sender
        self.content_lines = [content]
        self.raw_lines = [raw_text]

    def append(self, line: str) -> None:
        self.content_lines.append(line)
        self.raw_lines.append(line)

    def freeze(self) -> RawMessage:
        return RawMessage(
            timestamp=self.timestamp,
            sender=self.sender,
            content="\n".join(self.content_lines),
            raw_text="\n".join(self.raw_lines),
        )


class MessageAssembler:
    """Groups the lines of a chat export into multi-line messages."""

    def __init__(self, header_patterns: Tuple[Pattern[str], ...] = DEFAULT_HEADER_PATTERNS):
        self.header_patterns = header_patterns

    def assemble(self, lines: Iterable[str]) -> List[RawMessage]:
        messages: List[RawMessage] = []
        current: Optional[_MessageBuffer] = None
        orphaned = 0

        for raw_line in lines:
            line = raw_line.strip()
            if not line:
                continue

            header = self._match_header(line)
            if header:
                if current:
                    messages.append(current.freeze())
                date, time, sender, content = header.groups()
                current = _MessageBuffer(
                    timestamp=f"{date}, {time}",
                    sender=sender.strip(),
                    content=content or "",
                    raw_text=line,
                )
            elif current:
                current.append(line)
            else:
                orphaned += 1

        if current:
            messages.append(current.freeze())

        if orphaned:
            logger.debug(f"Dropped {orphaned} line(s) found before the first message header.")
        logger.info(f"Assembled {len(messages)} messages.")
        return messages

    def _match_header(self, line: str) -> Optional[re.Match]:
        for pattern in self.header_patterns:
            match = pattern.match(line)
            if match:
                return match
        return None
