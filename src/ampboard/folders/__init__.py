"""Folder listing engine: scanning, URL rules and link templates."""

from ampboard.folders.renderer import FoldersRenderer
from ampboard.folders.rules import RuleEngine, compile_rule_pattern
from ampboard.folders.scanner import FolderScanner
from ampboard.folders.templates import TemplateResolver, index_templates

__all__ = [
    "FolderScanner",
    "FoldersRenderer",
    "RuleEngine",
    "TemplateResolver",
    "compile_rule_pattern",
    "index_templates",
]
