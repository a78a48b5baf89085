"""Pipeline simulator.

Gives the user the appearance of a multi-stage job: the workflow's stage
messages are revealed one at a time on a fixed delay, then the report
requester is called. No computation happens.

Lifecycle::

    IDLE -> RUNNING -> COMPLETED
                    -> FAILED

Each run gets a run id. Every log line, the result and the final state are
only written while that id is still the session's current one, so a
superseded or cancelled run cannot land stale updates.
"""

import asyncio
import logging

from ..configs import get_workflow_config, template_values
from ..core import AnalysisConfig, AnalysisResult, RunState
from ..reporting import ReportRequester
from ..session import AnalysisSession

logger = logging.getLogger(__name__)

# Delay between revealed stages
STAGE_DELAY_SECONDS = 0.8

REPORT_MESSAGE = "Generating final report and output tables..."
SUCCESS_MESSAGE = "Pipeline completed successfully."
ERROR_RESULT_MESSAGE = "Pipeline finished with errors."
FAILED_MESSAGE = "Error: Pipeline failed."


class SimulationError(RuntimeError):
    """Raised when a run cannot be started."""


def get_simulation_steps(config: AnalysisConfig) -> list[str]:
    """Get the ordered stage messages for a run.

    Parameters
    ----------
    config : AnalysisConfig
        Run configuration. Only the differential expression stages use the
        statistical method and p-value.

    Returns
    -------
    list[str]
        Stage messages in reveal order
    """
    workflow_config = get_workflow_config(config.workflow)
    return workflow_config.render_stages(template_values(config))


class PipelineSimulator:
    """Runs the scripted stage sequence for an AnalysisSession.

    Example:
        >>> session = AnalysisSession(workflow=WorkflowType.SINGLE_CELL)
        >>> simulator = PipelineSimulator(session)
        >>> result = asyncio.run(simulator.run())
        >>> session.state
        <RunState.COMPLETED: 'COMPLETED'>
    """

    def __init__(
        self,
        session: AnalysisSession,
        requester: ReportRequester | None = None,
        stage_delay: float = STAGE_DELAY_SECONDS,
    ):
        """Initialize simulator.

        Parameters
        ----------
        session : AnalysisSession
            State object the run reads from and writes to
        requester : ReportRequester, optional
            Report requester. Defaults to one backed by Gemini.
        stage_delay : float, default=0.8
            Seconds between revealed stages
        """
        self.session = session
        self.requester = requester if requester is not None else ReportRequester()
        self.stage_delay = stage_delay

    def begin(self) -> int:
        """Start a new run synchronously.

        Clears logs and result, enters RUNNING and invalidates any run still
        in flight.

        Returns
        -------
        int
            Id of the new run
        """
        run_id = self.session.run_id + 1
        self.session.param.update(
            run_id=run_id,
            logs=[],
            result=None,
            state=RunState.RUNNING,
        )
        return run_id

    def cancel(self) -> None:
        """Abandon the active run and return to IDLE."""
        if not self.session.is_running:
            return
        logger.info(f"Cancelling run {self.session.run_id}")
        self.session.param.update(
            run_id=self.session.run_id + 1,
            state=RunState.IDLE,
        )

    async def run(
        self,
        config: AnalysisConfig | None = None,
        supersede: bool = True,
    ) -> AnalysisResult | None:
        """Run the simulated pipeline.

        Parameters
        ----------
        config : AnalysisConfig, optional
            Run configuration. Defaults to a snapshot of the session.
        supersede : bool, default=True
            If a run is already active, replace it. If False, raise instead.

        Returns
        -------
        AnalysisResult or None
            The run's result, or None if the run failed or was superseded

        Raises
        ------
        SimulationError
            If a run is active and ``supersede`` is False
        """
        if self.session.is_running and not supersede:
            raise SimulationError("A pipeline run is already in progress")

        if config is None:
            config = self.session.to_config()

        steps = get_simulation_steps(config)
        run_id = self.begin()
        logger.info(f"Run {run_id}: starting {config.workflow.value} ({len(steps)} stages)")

        if not self._log(run_id, f"Initializing {config.workflow.value} pipeline..."):
            return None

        for step in steps:
            await asyncio.sleep(self.stage_delay)
            if not self._log(run_id, step):
                return None

        if not self._log(run_id, REPORT_MESSAGE):
            return None

        try:
            result = await asyncio.to_thread(self.requester.request, config)
        except Exception as e:
            logger.error(f"Run {run_id}: report requester raised: {e}")
            if self._log(run_id, FAILED_MESSAGE):
                self.session.state = RunState.FAILED
            return None

        if not self.session.is_current(run_id):
            logger.debug(f"Run {run_id}: discarding stale result")
            return None

        self.session.result = result
        self._log(run_id, SUCCESS_MESSAGE if result.success else ERROR_RESULT_MESSAGE)
        self.session.state = RunState.COMPLETED
        logger.info(f"Run {run_id}: completed with status {result.status.value}")
        return result

    def _log(self, run_id: int, message: str) -> bool:
        appended = self.session.append_log(message, run_id)
        if not appended:
            logger.debug(f"Run {run_id}: dropped stale message {message!r}")
        return appended
