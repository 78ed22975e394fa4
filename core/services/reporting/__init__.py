from .service import ScoringReportService

__all__ = ["ScoringReportService"]
