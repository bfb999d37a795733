"""Test fakes for running the pipeline without a generation service.

Example:
    from tests.fakes import StaticGenerator

    generator = StaticGenerator({"title": "T", "summary": "S"})
"""

from .generation import FailingGenerator, StaticGenerator

__all__ = [
    "FailingGenerator",
    "StaticGenerator",
]
