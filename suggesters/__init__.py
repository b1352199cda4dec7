from .header_suggester import (
    AliasHeaderSuggester,
    CollaboratorError,
    HeaderSuggester,
    suggest_mapping,
)

__all__ = ["AliasHeaderSuggester", "CollaboratorError", "HeaderSuggester", "suggest_mapping"]
