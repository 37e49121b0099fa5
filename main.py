import sys
import json
from pathlib import Path
from typing import Any, List

# --- Settings/Logging ---
from src.logging.setup import setup_logging
from src.config.settings import settings

setup_logging()

from loguru import logger

# --- End Settings/Logging ---

from src.ingestion.chat_loader import InputUnavailableError, load_chat_lines
from src.pipeline import PipelineResult, RosterPipeline

from rich import print
from rich.panel import Panel


def save_json(data: Any, output_path: Path) -> bool:
    """Writes one stage output as pretty-printed JSON."""
    try:
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        logger.success(f"Saved {output_path}")
        return True
    except IOError as e:
        logger.error(f"Failed to write {output_path}: {e}")
    except TypeError as e:
        logger.error(f"Data structure not JSON serializable when writing to {output_path}: {e}")
    return False


def export_results(result: PipelineResult, output_dir: Path) -> None:
    output_dir.mkdir(parents=True, exist_ok=True)
    dumped = result.model_dump(mode="json")

    save_json(dumped["messages"], output_dir / "messages.json")
    save_json(
        {
            "summary": dumped["event_summary"],
            "filter_report": dumped["filter_report"],
            "events": dumped["events"],
        },
        output_dir / "events.json",
    )
    save_json(
        {
            "summary": dumped["ranking_summary"],
            "alias_report": dumped["alias_report"],
            "rankings": dumped["ranking"],
        },
        output_dir / "ranking.json",
    )
    save_json(dumped["consolidated"], output_dir / "consolidated.json")


def print_summary(result: PipelineResult, top_n: int = 5) -> None:
    stats = result.ranking_summary
    lines: List[str] = [
        f"Messages: {result.message_summary.total_messages} "
        f"from {len(result.message_summary.senders)} senders",
        f"Events kept: {result.filter_report.kept} of {result.filter_report.received} "
        f"(avg {result.event_summary.average_players} players)",
        f"Players: {stats.total_players} ({stats.total_attendances} attendances)",
        f"Consolidated players: {len(result.consolidated)}",
        "",
        f"[bold]Top {top_n}:[/bold]",
    ]
    for position, player in enumerate(result.consolidated[:top_n], start=1):
        lines.append(f"{position}. {player.name} - {player.total_attendance}")

    print(Panel("\n".join(lines), title="Attendance Roster", expand=False))


def main(argv: List[str]) -> int:
    """Main entry point for the application."""
    if len(argv) < 2:
        logger.error("Usage: python main.py <chat-export.txt>")
        return 1

    logger.info("Starting roster build")

    try:
        lines = load_chat_lines(argv[1])
    except InputUnavailableError as e:
        logger.critical(f"{e}. Exiting without output.")
        return 1

    pipeline = RosterPipeline(
        aliases=settings.alias_table(),
        calendar=settings.day_calendar(),
        vocabulary=settings.extraction_vocabulary(),
        similarity_level=settings.similarity_level,
        naming_policy=settings.naming_policy,
        min_attendance=settings.min_attendance,
    )
    result = pipeline.run(lines)

    if not result.events:
        logger.warning("No events found for the allowed days.")

    export_results(result, Path(settings.output_dir))
    print_summary(result)
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main(sys.argv))
    except KeyboardInterrupt:
        logger.info("Execution interrupted by user (KeyboardInterrupt).")
        sys.exit(0)
    except Exception as e:
        logger.exception(f"Unhandled exception in main execution: {e}")
        sys.exit(1)
