"""Core data models for voice-templates."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any


def normalize_utterance(utterance: str) -> str:
    """Collapse whitespace runs and prefix the separator the patterns expect.

    Every compiled fragment starts with a single space, so a non-empty
    utterance is matched as ``" " + text``. An empty utterance stays empty.
    """
    text = " ".join(utterance.split())
    return f" {text}" if text else ""


@dataclass(frozen=True)
class CompiledMatcher:
    """A compiled template: one regex pattern plus slot and parameter metadata."""

    template: str
    slots: tuple[str, ...] = ()
    slot_types: Mapping[str, str] = field(default_factory=dict)
    parameters: Mapping[str, str] = field(default_factory=dict)
    pattern: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "slots", tuple(self.slots))
        object.__setattr__(self, "slot_types", MappingProxyType(dict(self.slot_types)))
        object.__setattr__(self, "parameters", MappingProxyType(dict(self.parameters)))

    @property
    def regex(self) -> re.Pattern[str]:
        """The pattern compiled the way ``match`` uses it by default (ignoring case)."""
        return self.compile_regex()

    def compile_regex(self, ignore_case: bool = True) -> re.Pattern[str]:
        return re.compile(self.pattern, re.IGNORECASE if ignore_case else 0)

    def match(self, utterance: str, ignore_case: bool = True) -> MatchResult | None:
        """Match a whole utterance. Returns a MatchResult, or None on no match."""
        m = self.compile_regex(ignore_case).fullmatch(normalize_utterance(utterance))
        if m is None:
            return None
        values: dict[str, str | None] = {}
        for name, value in zip(self.slots, m.groups()):
            value = value.strip() if value is not None else None
            values[name] = value or None
        return MatchResult(matcher=self, utterance=utterance, slots=values)

    def to_dict(self) -> dict[str, Any]:
        return {
            "template": self.template,
            "slots": list(self.slots),
            "slot_types": dict(self.slot_types),
            "parameters": dict(self.parameters),
            "pattern": self.pattern,
        }


@dataclass
class MatchResult:
    """Outcome of matching an utterance against a CompiledMatcher."""

    matcher: CompiledMatcher
    utterance: str
    slots: dict[str, str | None] = field(default_factory=dict)

    @property
    def parameters(self) -> Mapping[str, str]:
        return self.matcher.parameters

    def to_dict(self) -> dict[str, Any]:
        return {
            "template": self.matcher.template,
            "utterance": self.utterance,
            "slots": dict(self.slots),
            "parameters": dict(self.parameters),
        }
