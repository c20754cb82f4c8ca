"""Recursive-descent parser for method and signal signatures.

Signatures come from topic commands such as::

    \\qmlmethod void ListView::positionViewAtIndex(int index, PositionMode mode)

The parser fills the return type and parameter list of a ``FunctionEntity``.
Whether a return type is present is decided by comparing the positions of
the first blank and the first opening parenthesis; signatures with unusual
spacing may be misread.
"""

import logging

from qmldoc.models import FunctionEntity, Location
from qmldoc.tokenizer import SignatureTokenizer, Tok, join_lexeme

logger = logging.getLogger(__name__)

# Keywords that may prefix or replace a type name
_SIZE_KEYWORDS = (Tok.SIGNED, Tok.UNSIGNED, Tok.SHORT, Tok.LONG, Tok.INT64)
_PRIMITIVE_KEYWORDS = (Tok.VOID, Tok.INT, Tok.CHAR, Tok.DOUBLE, Tok.ELLIPSIS)
_SIZED_PRIMITIVES = (Tok.INT, Tok.CHAR, Tok.DOUBLE)
_TYPE_SUFFIXES = (Tok.AMPERSAND, Tok.ASTER, Tok.CONST, Tok.CARET)


class SignatureParser:
    """Parses one signature into a function entity.

    Parameters already appended when a later parameter fails to parse are
    kept, so a ``False`` result means the entity's signature is unreliable.
    """

    def __init__(self, function: FunctionEntity, signature: str, location: Location | None = None):
        self.function = function
        self.signature = signature
        self.location = location
        self.return_type = ""
        self.qualifiers: list[str] = []
        self.name = ""
        self._tokenizer = SignatureTokenizer(signature)
        self._tok = Tok.EOI

    def parse(self) -> bool:
        """Parse the signature and update the function entity.

        Returns:
            True if the whole signature matched, False otherwise.
        """
        self._read_token()
        return self._match_function_decl()

    def _read_token(self) -> None:
        self._tok = self._tokenizer.get_token()

    def _match(self, target: Tok) -> bool:
        """Consume the current token if it is ``target``."""
        if self._tok is target:
            self._read_token()
            return True
        return False

    def _match_any(self, targets: tuple[Tok, ...]) -> bool:
        return any(self._match(target) for target in targets)

    def _match_type_and_name(self, want_name: bool) -> tuple[bool, str, str]:
        """Match a data type and, when ``want_name`` is set, an optional name.

        Returns:
            Tuple of (matched, type text, name text)
        """
        type_text = ""
        name = ""

        # One iteration per segment of Alpha::Beta::...::Omega
        while True:
            virgin = True

            if self._tok is not Tok.IDENT:
                while self._match_any(_SIZE_KEYWORDS):
                    type_text = join_lexeme(type_text, self._tokenizer.previous_lexeme())
                    virgin = False

            if virgin:
                if self._match(Tok.IDENT) or self._match_any(_PRIMITIVE_KEYWORDS):
                    type_text = join_lexeme(type_text, self._tokenizer.previous_lexeme())
                else:
                    return False, type_text, name
            elif self._match_any(_SIZED_PRIMITIVES):
                type_text = join_lexeme(type_text, self._tokenizer.previous_lexeme())

            if self._match(Tok.GULBRANDSEN):
                type_text = join_lexeme(type_text, self._tokenizer.previous_lexeme())
            else:
                break

        while self._match_any(_TYPE_SUFFIXES):
            type_text = join_lexeme(type_text, self._tokenizer.previous_lexeme())

        if want_name and self._match(Tok.IDENT):
            name = self._tokenizer.previous_lexeme()

        if self._tok is Tok.LEFT_BRACKET:
            start_depth = self._tokenizer.bracket_depth
            while (
                (self._tokenizer.bracket_depth >= start_depth and self._tok is not Tok.EOI)
                or self._tok is Tok.RIGHT_BRACKET
            ):
                type_text = join_lexeme(type_text, self._tokenizer.lexeme())
                self._read_token()

        return True, type_text, name

    def _match_parameter(self) -> bool:
        matched, type_text, name = self._match_type_and_name(want_name=True)
        if not name:
            # A lone token names the parameter; its type is unknown
            name = type_text
            type_text = ""

        if not matched:
            return False

        default_value = ""
        if self._match(Tok.EQUAL):
            start_depth = self._tokenizer.paren_depth
            while (
                self._tokenizer.paren_depth >= start_depth
                and (self._tok is not Tok.COMMA or self._tokenizer.paren_depth > start_depth)
                and self._tok is not Tok.EOI
            ):
                default_value = join_lexeme(default_value, self._tokenizer.lexeme())
                self._read_token()

        self.function.parameters.append(type_text, name, default_value)
        return True

    def _match_function_decl(self) -> bool:
        first_blank = self.signature.find(" ")
        left_paren = self.signature.find("(")
        if first_blank > 0 and (left_paren - first_blank) > 1:
            matched, self.return_type, _ = self._match_type_and_name(want_name=False)
            if not matched:
                return False

        names = []
        while self._match(Tok.IDENT):
            names.append(self._tokenizer.previous_lexeme())
            if not self._match(Tok.GULBRANDSEN):
                self.name = names.pop()
                break
        self.qualifiers = names

        if self._tok is not Tok.LEFT_PAREN:
            return False
        self._read_token()

        if self.location is not None:
            self.function.location = self.location
        self.function.return_type = self.return_type

        if self._tok is not Tok.RIGHT_PAREN:
            self.function.parameters.clear()
            while True:
                if not self._match_parameter():
                    return False
                if not self._match(Tok.COMMA):
                    break

        return self._match(Tok.RIGHT_PAREN)


def parse_signature(signature: str, function: FunctionEntity, location: Location | None = None) -> bool:
    """Parse ``signature`` into ``function``'s return type and parameters.

    Args:
        signature: Signature text, e.g. ``"void foo(int x)"``
        function: Entity to update
        location: Location assigned to the entity once the parameter list starts

    Returns:
        True on success. On failure, fields written before the failing token are kept.
    """
    parser = SignatureParser(function, signature, location)
    if parser.parse():
        return True
    logger.debug(f"Failed to parse signature: {signature}")
    return False
