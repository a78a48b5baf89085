"""Report requester: configuration in, AnalysisResult out.

Builds the prompt for a run, asks the text-generation service for a report,
and pairs the text with the workflow's static file manifest. Every failure
is converted into an Error-status result; nothing is retried or cached.
"""

import logging

from ..configs import get_workflow_config, template_values
from ..core import AnalysisConfig, AnalysisResult, FileEntry, ResultStatus, WorkflowType
from .client import GeminiTextClient, TextGenerationClient

logger = logging.getLogger(__name__)

BASE_INSTRUCTION = (
    "You are an expert senior bioinformatician. "
    "You have just completed a complex analysis pipeline."
)
DEFAULT_TEMPERATURE = 0.3
FALLBACK_REPORT = "Analysis complete."
ERROR_REPORT_TEMPLATE = "### Workflow Error\n\nFailed to execute pipeline. Details: {message}"


def build_system_instruction(config: AnalysisConfig) -> str:
    """Build the system instruction for a run.

    The base instruction is followed by the workflow's template with the
    method name and thresholds substituted in.
    """
    workflow_config = get_workflow_config(config.workflow)
    instruction = workflow_config.render_instruction(template_values(config))
    if not instruction:
        return BASE_INSTRUCTION
    return f"{BASE_INSTRUCTION} {instruction}"


def build_content_request(config: AnalysisConfig) -> str:
    """Build the short content request sent alongside the instruction."""
    return f"Generate a bioinformatics analysis report for workflow: {config.workflow.value}"


def get_file_manifest(workflow: WorkflowType | str) -> list[FileEntry]:
    """Get the static file manifest for a workflow."""
    return list(get_workflow_config(workflow).files)


class ReportRequester:
    """Requests a prose report for a run.

    Example:
        >>> requester = ReportRequester()  # Gemini, key from environment
        >>> result = requester.request(AnalysisConfig(workflow=WorkflowType.BULK_RNA))
        >>> result.status
        <ResultStatus.SUCCESS: 'SUCCESS'>
    """

    def __init__(
        self,
        client: TextGenerationClient | None = None,
        temperature: float = DEFAULT_TEMPERATURE,
    ):
        """Initialize requester.

        Parameters
        ----------
        client : TextGenerationClient, optional
            Text generator. Defaults to a ``GeminiTextClient`` configured
            from the environment.
        temperature : float, default=0.3
            Sampling temperature (low favours factual-sounding prose)
        """
        self.client = client if client is not None else GeminiTextClient()
        self.temperature = temperature

    def request(self, config: AnalysisConfig) -> AnalysisResult:
        """Request a report for the given configuration.

        Parameters
        ----------
        config : AnalysisConfig
            Run configuration

        Returns
        -------
        AnalysisResult
            SUCCESS with report text and manifest, or ERROR with an error
            Markdown block and no files
        """
        try:
            text = self.client.generate(
                build_content_request(config),
                system_instruction=build_system_instruction(config),
                temperature=self.temperature,
            )
            files = get_file_manifest(config.workflow)
        except Exception as e:
            logger.error(f"Report generation failed for {config.workflow.value}: {e}")
            return AnalysisResult(
                report_markdown=ERROR_REPORT_TEMPLATE.format(message=e),
                status=ResultStatus.ERROR,
            )

        return AnalysisResult(
            report_markdown=text or FALLBACK_REPORT,
            status=ResultStatus.SUCCESS,
            files=files,
        )
