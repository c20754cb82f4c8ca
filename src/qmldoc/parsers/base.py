from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from qmldoc.declarations import Program
from qmldoc.models import CommentSpan


@dataclass
class Outline:
    """Declaration tree of a file together with every comment in it."""
    program: Program
    comments: list[CommentSpan] = field(default_factory=list)


class BaseParser(ABC):
    """Abstract base class for language-specific declaration readers."""

    @abstractmethod
    def parse(self, source_code: str) -> Outline:
        """Read the declarations and comments of a source file.

        Args:
            source_code: The source code to parse

        Returns:
            Outline with the declaration tree and the comment spans in file order
        """
        pass
