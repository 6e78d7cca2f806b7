"""
elpais_pipeline
---------------
Scrape the El País Opinion section, batch-translate the titles ES → EN and
report words repeated across the translated titles.
"""

from elpais_pipeline.models import Article, PipelineResult, RunContext

__all__ = ["Article", "PipelineResult", "RunContext"]
