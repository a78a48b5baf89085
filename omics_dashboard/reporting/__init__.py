"""Report generation via a hosted text-generation service.

Example:
    >>> from omics_dashboard.reporting import ReportRequester
    >>> from omics_dashboard.core import AnalysisConfig, WorkflowType
    >>> result = ReportRequester().request(AnalysisConfig(workflow=WorkflowType.SINGLE_CELL))
    >>> print(result.report_markdown)
"""

from .client import (
    ExternalServiceError,
    TextGenerationClient,
    GeminiTextClient,
    DEFAULT_MODEL,
)
from .requester import (
    ReportRequester,
    build_system_instruction,
    build_content_request,
    get_file_manifest,
    BASE_INSTRUCTION,
    FALLBACK_REPORT,
)

__all__ = [
    'ExternalServiceError',
    'TextGenerationClient',
    'GeminiTextClient',
    'DEFAULT_MODEL',
    'ReportRequester',
    'build_system_instruction',
    'build_content_request',
    'get_file_manifest',
    'BASE_INSTRUCTION',
    'FALLBACK_REPORT',
]
