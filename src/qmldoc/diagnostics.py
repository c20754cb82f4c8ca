"""Collection of user-facing warnings produced while extracting documentation."""

import logging
from dataclasses import dataclass, field

from qmldoc.models import Location

logger = logging.getLogger(__name__)


@dataclass
class Diagnostic:
    location: Location
    message: str
    details: str = ""

    def __str__(self) -> str:
        text = f"{self.location}: warning: {self.message}"
        if self.details:
            text += f" ({self.details})"
        return text


@dataclass
class Diagnostics:
    """Warning sink. Every warning is recorded and logged."""
    items: list[Diagnostic] = field(default_factory=list)

    def warning(self, location: Location, message: str, details: str = "") -> None:
        diagnostic = Diagnostic(location=location, message=message, details=details)
        self.items.append(diagnostic)
        logger.warning(str(diagnostic))

    def __len__(self) -> int:
        return len(self.items)

    def messages(self) -> list[str]:
        return [item.message for item in self.items]
