"""Local visualization components."""

from canview.visualization.console import ConsoleVisualizer

__all__ = ["ConsoleVisualizer"]
