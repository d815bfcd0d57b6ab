"""OmniBOR document composition."""

from .compose import check_coverage, compose_document, render_document, sort_records

__all__ = ["check_coverage", "compose_document", "render_document", "sort_records"]
