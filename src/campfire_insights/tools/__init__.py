"""Tools module for Campfire Insights."""

from campfire_insights.tools.executor import ShapingExecutor, ToolExecutionError

__all__ = [
    "ShapingExecutor",
    "ToolExecutionError",
]
