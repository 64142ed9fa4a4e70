"""Nextflow pipeline builder package."""

from nfbuilder.main import PipelineBuilder

__all__ = ["PipelineBuilder"]
