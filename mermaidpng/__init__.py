"""Render Mermaid diagrams from .mmd files and Markdown documents to PNG."""

__version__ = "0.1.0"
