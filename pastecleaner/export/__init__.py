"""PasteCleaner Export: alternative projections of a document."""

from .space import format_vector, project_space, space_output_paths

__all__ = ["format_vector", "project_space", "space_output_paths"]
