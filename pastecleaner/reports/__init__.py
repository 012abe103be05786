"""PasteCleaner Reports: read-only statistics about a document."""

from .info import InfoReport, collect_info, create_environment, render_info

__all__ = ["InfoReport", "collect_info", "create_environment", "render_info"]
