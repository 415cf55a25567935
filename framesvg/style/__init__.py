from framesvg.style.theme import DEFAULT_TOKENS, StyleTokens, merge_attributes, validate_style_tokens

__all__ = ["DEFAULT_TOKENS", "StyleTokens", "merge_attributes", "validate_style_tokens"]
