from .tree_checks import TreeInvariantError, check_tree

__all__ = ["TreeInvariantError", "check_tree"]
