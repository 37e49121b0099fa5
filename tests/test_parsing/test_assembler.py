"""Tests for reassembling chat lines into messages."""

from src.parsing.assembler import MessageAssembler


class TestMessageAssembler:
    def test_one_message_per_header(self):
        lines = [
            "[24/07/25, 10:00:00 a. m.] Alex: Hola",
            "[24/07/25, 10:01:00 a. m.] Bruno: Buenas",
            "[24/07/25, 10:02:00 a. m.] Carla: Qué tal",
        ]
        messages = MessageAssembler().assemble(lines)
        assert [m.sender for m in messages] == ["Alex", "Bruno", "Carla"]
        assert messages[0].timestamp == "24/07/25, 10:00:00 a. m."
        assert messages[1].content == "Buenas"

    def test_continuation_lines_attach_to_previous_header(self):
        lines = [
            "[24/07/25, 10:00:00 a. m.] Alex: Pichanga viernes",
            "Día: viernes",
            "1. Alex",
            "[24/07/25, 10:05:00 a. m.] Bruno: Voy",
            "2. Bruno",
        ]
        messages = MessageAssembler().assemble(lines)
        assert len(messages) == 2
        assert messages[0].content == "Pichanga viernes\nDía: viernes\n1. Alex"
        assert messages[0].raw_text == (
            "[24/07/25, 10:00:00 a. m.] Alex: Pichanga viernes\nDía: viernes\n1. Alex"
        )
        assert messages[1].content == "Voy\n2. Bruno"

    def test_blank_lines_are_skipped(self):
        lines = [
            "[24/07/25, 10:00:00 a. m.] Alex: Lista",
            "",
            "   ",
            "1. Alex",
        ]
        messages = MessageAssembler().assemble(lines)
        assert len(messages) == 1
        assert messages[0].content == "Lista\n1. Alex"

    def test_lines_before_first_header_are_dropped(self):
        lines = [
            "stray text",
            "[24/07/25, 10:00:00 a. m.] Alex: Hola",
        ]
        messages = MessageAssembler().assemble(lines)
        assert len(messages) == 1
        assert messages[0].content == "Hola"

    def test_system_content_keeps_marker(self):
        lines = ["[24/07/25, 10:00:00 a. m.] Alex: \u200eimage omitted"]
        messages = MessageAssembler().assemble(lines)
        assert messages[0].sender == "Alex"
        assert messages[0].content.endswith("image omitted")

    def test_empty_input(self):
        assert MessageAssembler().assemble([]) == []
