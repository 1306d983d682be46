"""GitHub Actions host environment: inputs, trigger context, outputs."""

from .config import DEFAULT_TEMPLATE_FILENAME, ActionConfig
from .context import PullRequestContext, load_event
from .log import ActionLogger
from .runtime import ActionOutputs, WorkspaceTemplateLoader

__all__ = [
    "ActionConfig",
    "ActionLogger",
    "ActionOutputs",
    "DEFAULT_TEMPLATE_FILENAME",
    "PullRequestContext",
    "WorkspaceTemplateLoader",
    "load_event",
]
