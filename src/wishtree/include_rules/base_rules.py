from abc import ABC, abstractmethod


class BaseInclusionRules(ABC):
    """
    Abstract base class defining the interface for file inclusion rules.

    Inclusion rules decide which files found under a filtered directory's source root
    end up in the rendered output. Implementations receive paths relative to that
    source root, using forward slashes regardless of the host platform. They are
    shared by immutable tree nodes, so they must not change after construction.

    Example:
        >>> from wishtree.include_rules.glob_rules import GlobInclusionRules
        >>> rules = GlobInclusionRules(["**/*.md"])
        >>> rules.include("doc/a.md")
        True
        >>> rules.include("doc/b.txt")
        False
    """

    __slots__ = ()

    @abstractmethod
    def include(self, path: str) -> bool:
        """
        Determine if a file at the given relative path should be included.

        Args:
            path (str): Path relative to the source root, segments joined by "/".

        Returns:
            bool: True if the file should be part of the output.

        Example:
            >>> class SuffixRules(BaseInclusionRules):
            ...     def __init__(self, suffix: str):
            ...         self.suffix = suffix
            ...     def include(self, path: str) -> bool:
            ...         return path.endswith(self.suffix)
            >>> SuffixRules(".py").include("pkg/mod.py")
            True
        """
        pass
