"""
Faber - write-once, deploy-everywhere AI agent definitions

Faber loads declarative concepts (roles, tools, teams, workflows, evals),
layers organization/platform/concept overlays over them, and renders the
result into framework-specific deployment artifacts.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
