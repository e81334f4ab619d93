"""Template compiler: turns command templates into CompiledMatchers.

Grammar (informal EBNF):
    template      := (param | untyped_slot | typed_slot | alternatives | words)*
    param         := '[' ident '=' ident ']'
    untyped_slot  := '[' ident ']'
    typed_slot    := '[' ident ':' ident ']'
    alternatives  := '(' alt ('|' alt)* ')'
    words         := any run of characters excluding '(' and '['
    ident         := word characters, surrounding whitespace ignored
    alt           := zero or more characters excluding '|' and ')'

Productions are tried in the order above against the rest of the template.
The first one that matches wins and is never revisited.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, field

from voice_templates.models import CompiledMatcher
from voice_templates.vocabulary import EntityVocabulary

logger = logging.getLogger(__name__)

_PARAMETER_RE = re.compile(r"\[\s*(\w+)\s*=\s*(\w+)\s*\]")
_UNTYPED_SLOT_RE = re.compile(r"\[\s*(\w+)\s*\]")
_TYPED_SLOT_RE = re.compile(r"\[\s*(\w+)\s*:\s*(\w+)\s*\]")
_ALTERNATIVES_RE = re.compile(r"\(([^)]+)\)")
_WORDS_RE = re.compile(r"[^(\[]+")

# {X} anywhere in the built pattern is shorthand for optional text. Escaped
# pairs are consumed whole so an escaped brace never opens or closes a group.
_OPTIONAL_RE = re.compile(r"(\\.)|\{((?:\\.|[^\\}])*)\}")

UNTYPED_SLOT_PATTERN = "( .+?)"


class TemplateError(Exception):
    """Raised when a template cannot be compiled."""


class UnknownEntityTypeError(TemplateError):
    """A typed slot names an entity type missing from the vocabulary."""

    def __init__(self, entity_type: str) -> None:
        self.entity_type = entity_type
        super().__init__(f"No entity type by the name '{entity_type}'")


class MalformedFragmentError(TemplateError):
    """No production recognizes the rest of the template."""

    def __init__(self, fragment: str, template: str, reason: str = "") -> None:
        self.fragment = fragment
        self.template = template
        message = f"Malformed fragment '{fragment}' in template '{template}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


@dataclass
class _CompileState:
    """Accumulator owned by a single compile call."""

    template: str
    pos: int = 0
    pattern: list[str] = field(default_factory=list)
    slots: list[str] = field(default_factory=list)
    slot_types: dict[str, str] = field(default_factory=dict)
    parameters: dict[str, str] = field(default_factory=dict)

    @property
    def rest(self) -> str:
        return self.template[self.pos:]

    def skip_whitespace(self) -> None:
        while self.pos < len(self.template) and self.template[self.pos].isspace():
            self.pos += 1

    def add_slot(self, name: str, fragment: str) -> None:
        if name in self.slots:
            raise MalformedFragmentError(
                fragment, self.template, f"slot '{name}' is already declared"
            )
        self.slots.append(name)


def _literal(text: str, keep_braces: bool = True) -> str:
    """Escape ``text`` for the pattern, single-spacing it.

    Braces survive unescaped in template text so the {optional} shorthand
    still applies to them.
    """
    escaped = re.escape(" ".join(text.split())).replace("\\ ", " ")
    if keep_braces:
        escaped = escaped.replace("\\{", "{").replace("\\}", "}")
    return escaped


def _optional_group(m: re.Match[str]) -> str:
    escaped, optional = m.groups()
    if escaped is not None:
        return escaped
    return f"(?:{optional})?"


def _alternation(alternatives: list[str], keep_braces: bool = True) -> str:
    """Join alternatives with '|', giving every non-empty one a leading space."""
    return "|".join(
        " " + _literal(alt, keep_braces) if alt else "" for alt in alternatives
    )


class TemplateCompiler:
    """Compiles templates against a fixed entity vocabulary.

    The compiler only reads its vocabulary, so one instance can serve any
    number of compilations.
    """

    def __init__(self, vocabulary: EntityVocabulary) -> None:
        self.vocabulary = vocabulary
        self._productions: tuple[tuple[str, re.Pattern[str], Callable[..., None]], ...] = (
            ("parameter", _PARAMETER_RE, self._parameter),
            ("untyped slot", _UNTYPED_SLOT_RE, self._untyped_slot),
            ("typed slot", _TYPED_SLOT_RE, self._typed_slot),
            ("alternatives", _ALTERNATIVES_RE, self._alternatives),
            ("words", _WORDS_RE, self._words),
        )

    def compile(self, template: str) -> CompiledMatcher:
        """Compile ``template``. Raises TemplateError on any failure."""
        state = _CompileState(template=template)
        while True:
            state.skip_whitespace()
            if state.pos >= len(template):
                return self._finish(state)
            for name, regex, handler in self._productions:
                m = regex.match(template, state.pos)
                if m is not None:
                    logger.debug("%s at %d: %r", name, state.pos, m.group(0))
                    handler(state, m)
                    state.pos = m.end()
                    break
            else:
                raise MalformedFragmentError(state.rest.strip(), template)

    def _finish(self, state: _CompileState) -> CompiledMatcher:
        pattern = _OPTIONAL_RE.sub(_optional_group, "".join(state.pattern))
        logger.debug("Compiled %r -> %r", state.template, pattern)
        return CompiledMatcher(
            template=state.template,
            slots=tuple(state.slots),
            slot_types=state.slot_types,
            parameters=state.parameters,
            pattern=pattern,
        )

    def _parameter(self, state: _CompileState, m: re.Match[str]) -> None:
        name, value = m.groups()
        state.parameters[name] = value

    def _untyped_slot(self, state: _CompileState, m: re.Match[str]) -> None:
        state.add_slot(m.group(1), m.group(0))
        state.pattern.append(UNTYPED_SLOT_PATTERN)

    def _typed_slot(self, state: _CompileState, m: re.Match[str]) -> None:
        slot_name, entity_type = m.groups()
        phrases = self.vocabulary.lookup(entity_type)
        if phrases is None:
            raise UnknownEntityTypeError(entity_type)
        state.add_slot(slot_name, m.group(0))
        state.slot_types[slot_name] = entity_type
        state.pattern.append("(" + _alternation(list(phrases), keep_braces=False) + ")")

    def _alternatives(self, state: _CompileState, m: re.Match[str]) -> None:
        alts = [alt.strip() for alt in m.group(1).split("|")]
        state.pattern.append("(?:" + _alternation(alts) + ")")

    def _words(self, state: _CompileState, m: re.Match[str]) -> None:
        state.pattern.append(" " + _literal(m.group(0)))


def compile_template(template: str, vocabulary: EntityVocabulary) -> CompiledMatcher:
    """Compile a single template against ``vocabulary``."""
    return TemplateCompiler(vocabulary).compile(template)


def build_matcher(template: str, vocabulary: EntityVocabulary) -> CompiledMatcher | None:
    """Compile ``template``, treating an empty template as "no matcher"."""
    if not template:
        return None
    return compile_template(template, vocabulary)
