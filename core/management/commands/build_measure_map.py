"""Compile the joined measure-map dataset into a Vega-Lite document.

The document is written only once it has been fully built and serialised, so a
failing build never leaves a partial file behind.
"""

from __future__ import annotations

from pathlib import Path

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from analysis.dataset import prepare_dataset, summarize_dataset
from analysis.errors import MeasureMapBuildError
from analysis.schema_contract import LEVELS, MEASURE_ID
from analysis.visibility import INITIAL_STATE, coverage_rows, point_rows
from core.charting.document import render_document_json
from core.services import compile_measure_map, load_configured_dataset


class Command(BaseCommand):
    """Build the measure-map visualization document."""

    help = "Compile the joined measure-map dataset into a Vega-Lite document."

    def add_arguments(self, parser) -> None:
        """Add command arguments."""

        parser.add_argument(
            "--data",
            default=None,
            help="Joined dataset CSV (defaults to settings.MEASURE_MAP_DATA_PATH).",
        )
        parser.add_argument(
            "--output",
            default=None,
            help="Write the document to this path instead of stdout.",
        )
        parser.add_argument(
            "--check",
            action="store_true",
            help="Validate the dataset and print a summary; do not emit a document.",
        )
        parser.add_argument(
            "--preview",
            action="store_true",
            help="Print per-level visible row counts for the initial selection state.",
        )

    def handle(self, *args, **options) -> str | None:
        """Run the command."""

        data_path = options["data"] or settings.MEASURE_MAP_DATA_PATH
        output: str | None = options["output"]
        check: bool = options["check"]
        preview: bool = options["preview"]

        # Keep stdout clean for the JSON document when no output file is given.
        report = self.stdout if (check or output) else self.stderr
        mode = "CHECK" if check else "BUILD"

        try:
            frame = load_configured_dataset(data_path)
            prepared = prepare_dataset(frame)
            summary = summarize_dataset(prepared)
            nodes = ", ".join(f"L{level}={summary.nodes_per_level[level]}" for level in LEVELS)
            report.write(
                f"[{mode}] {summary.rows} rows; nodes {nodes}; "
                f"{summary.measures} measures; {summary.gap_nodes} unmapped topics"
            )
            if preview:
                for level in LEVELS:
                    points = point_rows(prepared, level, INITIAL_STATE)
                    report.write(
                        f"[{mode}] level {level}: {len(coverage_rows(prepared, level, INITIAL_STATE))} rows, "
                        f"{len(points)} points, {points[MEASURE_ID].nunique()} measures"
                    )
            if check:
                return None
            payload = render_document_json(compile_measure_map(frame))
        except MeasureMapBuildError as exc:
            raise CommandError(str(exc)) from exc

        if output:
            Path(output).write_text(payload + "\n", encoding="utf-8")
            self.stdout.write(self.style.SUCCESS(f"[{mode}] wrote {output}"))
        else:
            self.stdout.write(payload)
        return None
