"""Monstershape build pipeline package.

This package orchestrates batch transforms of many source documents.
"""

from .orchestrator import BuildReport, FileResult, MonsterBuildPipeline

__all__ = ["BuildReport", "FileResult", "MonsterBuildPipeline"]
