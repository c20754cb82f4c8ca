"""Association of documentation comments with the declarations they precede."""

from qmldoc.models import CommentSpan

DOC_SIGILS = ("!", "*")


class CommentLocator:
    """Finds the nearest unused documentation comment above a declaration.

    A comment is used at most once. Candidates must begin after
    ``last_end_offset``, the end of the last declaration whose visit completed.
    """

    def __init__(self, source: str, comments: list[CommentSpan]):
        self.source = source
        self.comments = sorted(comments, key=lambda span: span.begin)
        self.used: set[int] = set()
        self.last_end_offset = 0

    def find_preceding(self, offset: int) -> CommentSpan | None:
        """Return the nearest documentation comment ending before ``offset``.

        Only block comments whose content starts with ``!`` or ``*`` qualify,
        which skips snippet markers and ordinary comments.
        """
        for span in reversed(self.comments):
            if span.begin <= self.last_end_offset:
                # Reached the end of the preceding declaration
                break
            if span.begin in self.used:
                break
            if span.end >= offset:
                continue
            if self.is_doc_comment(span):
                return span
        return None

    def is_doc_comment(self, span: CommentSpan) -> bool:
        if span.begin < 1 or self.source[span.begin - 1] != "*":
            return False
        return self.source[span.begin:span.end].startswith(DOC_SIGILS)

    def text(self, span: CommentSpan) -> str:
        """Return the comment content without its leading sigil."""
        return self.source[span.begin + 1:span.end]

    def mark_used(self, span: CommentSpan) -> None:
        self.used.add(span.begin)

    def advance(self, end_offset: int) -> None:
        """Move the cursor past a completed declaration. It never moves back."""
        self.last_end_offset = max(self.last_end_offset, end_offset)
