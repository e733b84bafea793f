"""Report output for Dispute Delta."""

from dispute_delta.reports.anomaly_report import AnomalyReportGenerator
from dispute_delta.reports.export import EXPORT_COLUMNS, write_csv, write_xlsx

__all__ = ["AnomalyReportGenerator", "EXPORT_COLUMNS", "write_csv", "write_xlsx"]
