from pydantic import BaseModel, ConfigDict


class RawMessage(BaseModel):
    """A single chat message reassembled from one header line plus its continuations."""

    model_config = ConfigDict(frozen=True)  # Make instances immutable

    timestamp: str  # "<date>, <time>" as captured from the header
    sender: str
    content: str  # Header content plus continuation lines, newline separated
    raw_text: str  # Every source line of the message, newline separated
