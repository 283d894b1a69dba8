"""Runtime core of the YOPL scripting language: values, environment, syntax-tree nodes and interpreter."""

__version__ = "0.1.0"

__all__ = ["environment", "interpreter", "nodes", "values"]