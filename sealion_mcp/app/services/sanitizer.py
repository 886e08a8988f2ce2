"""Input and output sanitization rules.

Both directions are driven by ordered (pattern, replacement) rule lists so
coverage can be read and tested on its own. This is a best-effort filter,
not a security boundary.
"""

import re
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

REDACTED = "[REDACTED]"


@dataclass(frozen=True)
class SanitizationRule:
    """One regex substitution applied to every string it sees."""
    name: str
    pattern: re.Pattern
    replacement: str

    @classmethod
    def compile(cls, name: str, pattern: str, replacement: str, flags: int = 0) -> "SanitizationRule":
        return cls(name=name, pattern=re.compile(pattern, flags), replacement=replacement)

    def apply(self, text: str) -> str:
        return self.pattern.sub(self.replacement, text)


INPUT_RULES: tuple[SanitizationRule, ...] = (
    # Opening and closing script tags; the tag markup goes, inner text stays
    SanitizationRule.compile("script_tag", r"<\s*/?\s*script\b[^>]*>", "", re.IGNORECASE),
    SanitizationRule.compile("javascript_uri", r"javascript:", "", re.IGNORECASE),
    SanitizationRule.compile("event_handler", r"on\w+\s*=", "", re.IGNORECASE),
    SanitizationRule.compile("quotes", r"['\"]", ""),
)

OUTPUT_RULES: tuple[SanitizationRule, ...] = (
    SanitizationRule.compile("credential_env_name", r"SEALION_API_KEY|API_KEY", REDACTED, re.IGNORECASE),
    SanitizationRule.compile("api_key", r"sk-[a-zA-Z0-9]{32,}", REDACTED),
    SanitizationRule.compile("bearer_token", r"Bearer\s+[a-zA-Z0-9_-]+", f"Bearer {REDACTED}", re.IGNORECASE),
    SanitizationRule.compile("password", r"password[:\s=]+[^\s]+", f"password: {REDACTED}", re.IGNORECASE),
)


def apply_rules(text: str, rules: Iterable[SanitizationRule]) -> str:
    for rule in rules:
        text = rule.apply(text)
    return text


def sanitize_input(value: Any, rules: Iterable[SanitizationRule] = INPUT_RULES) -> Any:
    """Recursively strip markup and quotes from every string in ``value``.

    Lists, tuples and mappings are rebuilt; other leaves pass through as-is.
    """
    rules = tuple(rules)
    if isinstance(value, str):
        return apply_rules(value, rules).strip()
    if isinstance(value, (list, tuple)):
        return type(value)(sanitize_input(item, rules) for item in value)
    if isinstance(value, Mapping):
        return {key: sanitize_input(item, rules) for key, item in value.items()}
    return value


def sanitize_output(text: str, rules: Iterable[SanitizationRule] = OUTPUT_RULES) -> str:
    """Redact credential-looking substrings from tool output."""
    return apply_rules(text, rules)
