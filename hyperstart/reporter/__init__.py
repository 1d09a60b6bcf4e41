"""Documentation for the generated project."""

from hyperstart.reporter.readme import ReadmeGenerator

__all__ = ["ReadmeGenerator"]
