"""Plain-text anomaly report generator."""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from dispute_delta.models.reports import DeltaReport

TEMPLATE_DIR = Path(__file__).parent / "templates"


class AnomalyReportGenerator:
    """Renders a comparison run as a plain-text report."""

    def __init__(self) -> None:
        self.env = Environment(loader=FileSystemLoader(str(TEMPLATE_DIR)), keep_trailing_newline=True)

    def render(self, report: DeltaReport) -> str:
        template = self.env.get_template("anomalies.txt")
        return template.render(report=report)
