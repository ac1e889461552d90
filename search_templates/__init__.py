from . import family_reports, templates
from .family_reports import write_broom_report, write_threshold_report
from .templates import ScanConfig, ScanSummary, run_equi, run_extremal, run_report, run_subset

__all__ = [
    "ScanConfig",
    "ScanSummary",
    "family_reports",
    "run_equi",
    "run_extremal",
    "run_report",
    "run_subset",
    "templates",
    "write_broom_report",
    "write_threshold_report",
]
