"""Workflow definitions from JSON files.

This module provides the canned stage messages, report instructions and
file manifests for each workflow, loaded from JSON config files.

Example:
    >>> from omics_dashboard.configs import get_workflow_config
    >>> config = get_workflow_config("BULK_RNA")
    >>> for f in config.files:
    ...     print(f"{f.name}: {f.type} ({f.size})")
"""

from .loader import (
    WorkflowConfig,
    get_workflow_config,
    list_workflows,
    template_values,
    clear_cache,
)

__all__ = [
    "WorkflowConfig",
    "get_workflow_config",
    "list_workflows",
    "template_values",
    "clear_cache",
]
