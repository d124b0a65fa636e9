"""Render a pie chart SVG from a JSON slice list."""

from __future__ import annotations

import json
from pathlib import Path

from django.core.management.base import BaseCommand, CommandError

from analysis.pie_chart import pie_slice_paths, render_pie_chart_svg
from core.forms import PieChartForm


class Command(BaseCommand):
    """Write an SVG pie chart for slices read from a JSON file."""

    help = (
        "Render a pie chart SVG. The input file holds either a list of slices or an "
        'object with a "slices" list; each slice has a percent in [0, 1] and an optional label and color.'
    )

    def add_arguments(self, parser) -> None:
        """Add command arguments."""

        parser.add_argument("input", help="Path to the JSON slice file.")
        parser.add_argument(
            "--output",
            default=None,
            help="Optional path for the SVG; defaults to stdout.",
        )

    def handle(self, *args, **options) -> str | None:
        """Run the command."""

        input_path = Path(options["input"])
        output: str | None = options["output"]

        try:
            payload = json.loads(input_path.read_text(encoding="utf-8"))
        except FileNotFoundError as exc:
            raise CommandError(f"Input file not found: {input_path}") from exc
        except json.JSONDecodeError as exc:
            raise CommandError(f"Input file is not valid JSON: {exc}") from exc

        if isinstance(payload, list):
            payload = {"slices": payload}
        if not isinstance(payload, dict):
            raise CommandError("Input must be a list of slices or an object with a `slices` list.")

        form = PieChartForm(data=payload)
        if not form.is_valid():
            messages = [
                error["message"]
                for field_errors in form.errors.get_json_data().values()
                for error in field_errors
            ]
            raise CommandError("Invalid slices:\n" + "\n".join(f"- {message}" for message in messages))

        slices = form.cleaned_data["slices"]
        total = sum(pie_slice.percent for pie_slice in slices)
        if total > 1 + 1e-9:
            self.stderr.write(self.style.WARNING(f"Slice percents sum to {total:.4f}; slices will overlap."))

        svg = render_pie_chart_svg(pie_slice_paths(slices))
        if output is None:
            self.stdout.write(svg)
            return None

        Path(output).write_text(svg + "\n", encoding="utf-8")
        self.stdout.write(self.style.SUCCESS(f"Wrote {len(slices)} slices to {output}."))
        return None
