"""voice-templates: compile voice command templates into utterance matchers."""

__version__ = "0.1.0"

from voice_templates.compiler import (  # noqa: E402
    MalformedFragmentError,
    TemplateCompiler,
    TemplateError,
    UnknownEntityTypeError,
    build_matcher,
    compile_template,
)
from voice_templates.models import CompiledMatcher, MatchResult  # noqa: E402
from voice_templates.vocabulary import (  # noqa: E402
    EntityVocabulary,
    VocabularyError,
    default_vocabulary,
    load_vocabulary,
)

__all__ = [
    "CompiledMatcher",
    "EntityVocabulary",
    "MalformedFragmentError",
    "MatchResult",
    "TemplateCompiler",
    "TemplateError",
    "UnknownEntityTypeError",
    "VocabularyError",
    "build_matcher",
    "compile_template",
    "default_vocabulary",
    "load_vocabulary",
]
