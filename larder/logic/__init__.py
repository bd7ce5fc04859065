"""Core business logic layer.

Subpackages:
- suggestions: recipe matching against stock
- inventory: inventory value and alert snapshots
- shopping: missing quantities for chosen recipes
"""
__all__ = ["suggestions", "inventory", "shopping"]
