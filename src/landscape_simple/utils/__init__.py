"""Utility helpers shared by the CLI."""

from .text import default_output_path

__all__ = ["default_output_path"]
