"""Tests for reading the chat export."""

import pytest

from src.ingestion.chat_loader import InputUnavailableError, load_chat_lines


class TestLoadChatLines:
    def test_reads_lines_in_order(self, tmp_path):
        chat = tmp_path / "chat.txt"
        chat.write_text("[24/07/25, 10:00:00 a. m.] Alex: Hola\nsegunda línea\n", encoding="utf-8")
        assert load_chat_lines(chat) == [
            "[24/07/25, 10:00:00 a. m.] Alex: Hola",
            "segunda línea",
            "",
        ]

    def test_missing_file_is_fatal(self, tmp_path):
        with pytest.raises(InputUnavailableError):
            load_chat_lines(tmp_path / "missing.txt")
