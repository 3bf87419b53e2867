"""Resolution of {{Name}} placeholder tokens against a data row."""
import re
from typing import List, Mapping, Optional

PLACEHOLDER_PATTERN = re.compile(r"\{\{([^}]+)\}\}")


def resolve(text: str, row: Optional[Mapping[str, str]]) -> str:
    """Substitute tokens with row values.

    Tokens whose trimmed name is absent from the row, or whose value is
    empty, are left verbatim; with no row at all every token is left as
    is. Substituted values are not rescanned.
    """
    if row is None:
        return text

    def _substitute(match: re.Match) -> str:
        value = row.get(match.group(1).strip())
        if isinstance(value, str) and value:
            return value
        return match.group(0)

    return PLACEHOLDER_PATTERN.sub(_substitute, text)


def find_placeholders(text: str) -> List[str]:
    """Trimmed token names in order of appearance."""
    return [m.group(1).strip() for m in PLACEHOLDER_PATTERN.finditer(text)]


def placeholder_for(name: str) -> str:
    return "{{" + name + "}}"
