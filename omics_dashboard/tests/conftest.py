"""Shared pytest fixtures and configuration.

This module provides common fixtures used across test modules:
- A fake text-generation client that records its calls
- Sessions and run configurations for simulator tests
- Environment isolation for API key resolution
"""

import pytest


# =============================================================================
# Fake Clients
# =============================================================================

class FakeTextClient:
    """Records every generate() call and returns canned text.

    If ``session`` is given, the session's log messages at call time are
    captured too, so tests can check what was revealed before the report
    was requested.
    """

    def __init__(self, text: str = "## Report\n\nAll good.", error: Exception | None = None, session=None):
        self.text = text
        self.error = error
        self.session = session
        self.calls = []
        self.logs_at_call = []

    def generate(self, contents, *, system_instruction=None, temperature=0.3):
        self.calls.append({
            "contents": contents,
            "system_instruction": system_instruction,
            "temperature": temperature,
        })
        if self.session is not None:
            self.logs_at_call.append(list(self.session.log_messages))
        if self.error is not None:
            raise self.error
        return self.text


class RaisingRequester:
    """Report requester that raises instead of returning a result."""

    def request(self, config):
        raise RuntimeError("requester exploded")


@pytest.fixture
def make_client():
    """Factory for FakeTextClient instances."""
    return FakeTextClient


@pytest.fixture
def raising_requester():
    """Requester whose request() raises."""
    return RaisingRequester()


@pytest.fixture
def fake_client():
    """Fake client returning a short Markdown report."""
    return FakeTextClient()


@pytest.fixture
def fake_requester(fake_client):
    """ReportRequester backed by the fake client."""
    from omics_dashboard.reporting import ReportRequester

    return ReportRequester(client=fake_client)


# =============================================================================
# Session Fixtures
# =============================================================================

@pytest.fixture
def session():
    """Fresh AnalysisSession with default configuration."""
    from omics_dashboard.session import AnalysisSession

    return AnalysisSession()


@pytest.fixture
def recording_simulator(session):
    """Simulator with zero stage delay whose client records logs at call time."""
    from omics_dashboard.reporting import ReportRequester
    from omics_dashboard.simulation import PipelineSimulator

    client = FakeTextClient(session=session)
    simulator = PipelineSimulator(
        session,
        requester=ReportRequester(client=client),
        stage_delay=0,
    )
    return simulator


@pytest.fixture
def de_config():
    """Differential expression configuration with Wilcoxon at p < 0.05."""
    from omics_dashboard.core import AnalysisConfig, StatMethod, WorkflowType

    return AnalysisConfig(
        workflow=WorkflowType.DIFF_EXPRESSION,
        stat_method=StatMethod.WILCOXON,
        p_value_threshold=0.05,
        log2fc_threshold=1.5,
    )


# =============================================================================
# Environment Fixtures
# =============================================================================

@pytest.fixture
def no_api_key(monkeypatch):
    """Remove every API key variable from the environment."""
    from omics_dashboard.reporting.client import API_KEY_ENV_VARS

    for name in API_KEY_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def fresh_config_cache():
    """Clear the workflow config cache around each test."""
    from omics_dashboard.configs import clear_cache

    clear_cache()
    yield
    clear_cache()


# =============================================================================
# Markers
# =============================================================================

def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line(
        "markers",
        "gui: marks tests that build Panel components (deselect with '-m \"not gui\"')"
    )
    config.addinivalue_line(
        "markers",
        "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
