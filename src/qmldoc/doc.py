"""Structured model of a documentation comment.

A comment is free text interleaved with backslash commands::

    \\qmlproperty int ListView::count
    \\readonly
    \\since 5.2

    This property holds the number of items in the view.

Registered metacommands and topic commands are taken out of the text and
recorded with their arguments; every other command stays in the body.
"""

import logging
import re
import textwrap
from dataclasses import dataclass, field
from typing import Iterable, NamedTuple

from qmldoc.commands import COMMAND_BRIEF, NO_ARGUMENT_COMMANDS
from qmldoc.models import Location

logger = logging.getLogger(__name__)

_COMMAND_RE = re.compile(r"\\(\w+)")


class Argument(NamedTuple):
    """One metacommand occurrence: its value and the optional ``[...]`` qualifier."""
    value: str
    bracketed: str = ""


@dataclass
class Topic:
    name: str
    args: str


@dataclass
class Doc:
    location: Location
    source: str
    body: str = ""
    brief: str = ""
    metacommands: dict[str, list[Argument]] = field(default_factory=dict)
    topics: list[Topic] = field(default_factory=list)

    def metacommands_used(self) -> list[str]:
        """Names of the metacommands and topics used, in order of first appearance."""
        return list(self.metacommands)

    def metacommand_args(self, name: str) -> list[Argument]:
        return self.metacommands.get(name, [])

    def is_empty(self) -> bool:
        return not self.source.strip()


def parse_doc(source: str, location: Location, commands: Iterable[str], topics: Iterable[str]) -> Doc:
    """Parse comment text into a ``Doc``.

    Args:
        source: Comment content without delimiters or sigil
        location: Location of the comment, used for diagnostics
        commands: Registered metacommand names
        topics: Registered topic command names

    Returns:
        Doc with the recognized commands removed from its body
    """
    commands = set(commands)
    topics = set(topics)
    doc = Doc(location=location, source=source)

    body_parts = []
    position = 0
    while True:
        match = _COMMAND_RE.search(source, position)
        if match is None:
            body_parts.append(source[position:])
            break

        name = match.group(1)
        if name not in commands and name not in topics and name != COMMAND_BRIEF:
            body_parts.append(source[position:match.end()])
            position = match.end()
            continue

        body_parts.append(source[position:match.start()])

        if name in NO_ARGUMENT_COMMANDS and name not in topics:
            doc.metacommands.setdefault(name, []).append(Argument(""))
            position = match.end()
            continue

        line_end = source.find("\n", match.end())
        if line_end == -1:
            line_end = len(source)
        rest = source[match.end():line_end]
        position = line_end

        if name in topics:
            doc.topics.append(Topic(name=name, args=rest.strip()))
            doc.metacommands.setdefault(name, []).append(Argument(rest.strip()))
        elif name == COMMAND_BRIEF:
            doc.brief = rest.strip()
        else:
            doc.metacommands.setdefault(name, []).append(_split_argument(rest))

    doc.body = _clean_body("".join(body_parts))
    return doc


def _split_argument(rest: str) -> Argument:
    text = rest.strip()
    bracketed = ""
    if text.startswith("["):
        close = text.find("]")
        if close != -1:
            bracketed = text[1:close].strip()
            text = text[close + 1:].strip()
    return Argument(text, bracketed)


def _clean_body(text: str) -> str:
    lines = [line.rstrip() for line in text.splitlines()]
    # Drop lines left blank by removed commands at either end
    while lines and not lines[0].strip():
        lines.pop(0)
    while lines and not lines[-1].strip():
        lines.pop()
    return textwrap.dedent("\n".join(lines))


@dataclass
class PropertyArguments:
    """Arguments of a ``\\qmlproperty`` topic: ``type [Module::][Type::]name``."""
    type: str
    name: str
    module: str = ""
    component: str = ""
    is_list: bool = False

    @classmethod
    def parse(cls, args: str) -> "PropertyArguments | None":
        """Parse topic arguments, returning None if they are malformed."""
        words = args.split()
        if len(words) < 2:
            logger.debug(f"Missing property type for {args!r}")
            return None

        data_type = words[0]
        is_list = False
        if data_type.startswith("list<") and data_type.endswith(">"):
            data_type = data_type[5:-1]
            is_list = True

        segments = words[1].split("::")
        if len(segments) == 3:
            module, component, name = segments
        elif len(segments) == 2:
            module = ""
            component, name = segments
        elif len(segments) == 1:
            module = component = ""
            name = segments[0]
        else:
            logger.debug(f"Unrecognizable QML module/component qualifier for {args!r}")
            return None

        if not name:
            return None
        return cls(type=data_type, name=name, module=module, component=component, is_list=is_list)
