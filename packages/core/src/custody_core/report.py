"""Plain text and Markdown rendering of case summaries."""

from dataclasses import dataclass
from typing import Optional

import structlog

from .models import COLUMN_LABELS, SUMMARY_COLUMNS, GeneralInfo, SummaryTable
from .session import CaseSession
from .summary import format_cell, format_total

logger = structlog.get_logger()

EMPTY_TABLE_TEXT = "No children yet."


@dataclass
class ReportSection:
    """A section of the report."""
    title: str
    header: list[str]
    rows: list[list[str]]
    note: Optional[str] = None


class SummaryReportGenerator:
    """
    Render the per-parent summary tables of a case.

    Reports include:
    - Case dates
    - One table per parent with a row per child and a Total row
    """

    def __init__(self):
        """Initialize the report generator."""
        self._meta: list[tuple[str, str]] = []
        self._sections: list[ReportSection] = []

    def generate(
        self,
        session: CaseSession,
        format: str = "text",
    ) -> str:
        """
        Generate the summary report for a case.

        Args:
            session: The case to report on
            format: Output format ("text" or "markdown")

        Returns:
            Formatted report string
        """
        tables = list(session.summaries().values())
        return self.generate_from_tables(session.general_info, tables, format=format)

    def generate_from_tables(
        self,
        general_info: GeneralInfo,
        tables: list[SummaryTable],
        format: str = "text",
    ) -> str:
        """Generate the report from already computed summary tables."""
        self._meta = self._case_meta(general_info)
        self._sections = [self._table_section(table) for table in tables]

        logger.info("summary_report_generated", format=format, tables=len(tables))

        if format == "markdown":
            return self._format_markdown()
        elif format == "text":
            return self._format_text()
        raise ValueError(f"Unsupported report format: {format}")

    def _case_meta(self, info: GeneralInfo) -> list[tuple[str, str]]:
        def show(value) -> str:
            return value.isoformat() if value else "-"

        return [
            ("Case Date", show(info.case_date)),
            ("As of", show(info.calculation_as_of_date)),
            ("Year End", show(info.case_year_end)),
        ]

    def _table_section(self, table: SummaryTable) -> ReportSection:
        header = ["Child"] + [COLUMN_LABELS[column] for column in SUMMARY_COLUMNS]
        if table.is_empty:
            return ReportSection(title=table.header, header=header, rows=[], note=EMPTY_TABLE_TEXT)

        rows = [
            [row.child_label] + [format_cell(value) for value in row.cells().values()]
            for row in table.rows
        ]
        rows.append(
            ["Total"]
            + [format_total(total, column) for column, total in table.totals.cells().items()]
        )
        return ReportSection(title=table.header, header=header, rows=rows)

    def _format_text(self) -> str:
        """Format report as plain text."""
        output = ["SUMMARY", "=" * 60]
        for label, value in self._meta:
            output.append(f"{label}: {value}")

        for section in self._sections:
            output.append("")
            output.append(section.title.upper())
            output.append("-" * 60)
            if section.note:
                output.append(section.note)
                continue

            widths = [
                max(len(line[i]) for line in [section.header, *section.rows])
                for i in range(len(section.header))
            ]
            for line in [section.header, *section.rows]:
                cells = [line[0].ljust(widths[0])]
                cells += [cell.rjust(width) for cell, width in zip(line[1:], widths[1:])]
                output.append("  ".join(cells).rstrip())

        return "\n".join(output)

    def _format_markdown(self) -> str:
        """Format report as Markdown."""
        output = ["# Summary", ""]
        for label, value in self._meta:
            output.append(f"- **{label}:** {value}")

        for section in self._sections:
            output.append(f"\n## {section.title}\n")
            if section.note:
                output.append(f"_{section.note}_")
                continue

            output.append("| " + " | ".join(section.header) + " |")
            output.append("|" + "|".join(["---"] + ["---:"] * (len(section.header) - 1)) + "|")
            for line in section.rows:
                if line[0] == "Total":
                    line = [f"**{cell}**" for cell in line]
                output.append("| " + " | ".join(line) + " |")

        return "\n".join(output)


__all__ = ["ReportSection", "SummaryReportGenerator"]
