"""Tests for batch statistics."""

from src.models.identity import Identity
from src.models.lookups import AliasTable
from src.models.message import RawMessage
from src.stats.summary import (
    build_alias_report,
    summarize_events,
    summarize_messages,
    summarize_ranking,
)


def _identity(name, count, variations=None):
    return Identity(canonical_name=name, attendance_count=count, variations=variations or [name])


class TestSummaries:
    def test_message_summary_keeps_sender_order(self):
        messages = [
            RawMessage(timestamp="t", sender=sender, content="x", raw_text="x")
            for sender in ["Bruno", "Alex", "Bruno"]
        ]
        summary = summarize_messages(messages)
        assert summary.total_messages == 3
        assert summary.senders == ["Bruno", "Alex"]

    def test_event_summary(self, event_factory):
        events = [
            event_factory(day="viernes", players=["A", "B", "C"]),
            event_factory(day="miércoles", players=["A"]),
            event_factory(day="viernes", players=["A", "B"]),
        ]
        summary = summarize_events(events)
        assert summary.total_events == 3
        assert summary.events_per_day == {"viernes": 2, "miércoles": 1}
        assert summary.average_players == 2.0

    def test_empty_event_summary(self):
        summary = summarize_events([])
        assert summary.total_events == 0
        assert summary.average_players == 0.0

    def test_ranking_summary_distribution(self):
        identities = [_identity("A", 21), _identity("B", 12), _identity("C", 5), _identity("D", 1)]
        summary = summarize_ranking(identities, total_events=25)
        assert summary.total_players == 4
        assert summary.total_attendances == 39
        assert summary.average_attendance == 9.8
        assert summary.median_attendance == 12
        assert summary.max_attendance == 21
        assert summary.min_attendance == 1
        assert summary.distribution == {"20+": 1, "15-19": 0, "10-14": 1, "5-9": 1, "1-4": 1}

    def test_empty_ranking_summary(self):
        summary = summarize_ranking([], total_events=0)
        assert summary.max_attendance == 0
        assert summary.median_attendance == 0
        assert summary.average_attendance == 0.0

    def test_median_of_odd_count(self):
        identities = [_identity("A", 7), _identity("B", 2), _identity("C", 4)]
        assert summarize_ranking(identities, total_events=7).median_attendance == 4


class TestAliasReport:
    def test_aliases_used_and_review_suggestions(self):
        identities = [
            _identity("Spectre", 6, ["conde", "Spectre"]),
            _identity("Alex", 5),
            _identity("Bruno", 2),
        ]
        report = build_alias_report(identities, AliasTable.from_mapping({"Conde": "Spectre"}))
        assert [e.name for e in report.aliases_used] == ["Spectre"]
        assert report.aliases_used[0].variations == ["conde", "Spectre"]
        assert report.configured_aliases == {"conde": "Spectre"}
        assert [e.name for e in report.players_to_review] == ["Alex"]

    def test_review_limit(self):
        identities = [_identity(f"P{i}", 3) for i in range(30)]
        report = build_alias_report(identities, AliasTable(), review_limit=20)
        assert len(report.players_to_review) == 20
