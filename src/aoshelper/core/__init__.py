"""Core engine: command tree, suggestions, token classification."""

from aoshelper.core.classifier import Category, classify
from aoshelper.core.normalizer import build_index
from aoshelper.core.suggest import apply_acceptance, suggest
from aoshelper.core.tree import PrefixNode

__all__ = ["Category", "PrefixNode", "apply_acceptance", "build_index", "classify", "suggest"]
