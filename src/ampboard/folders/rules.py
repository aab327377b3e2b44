"""Column URL rules: folder inclusion and name transformation."""

import re
from dataclasses import dataclass

from ampboard.core.models.column import Column

# Delimiters accepted for PHP-style pattern literals such as "/^wp-/i".
LITERAL_DELIMITERS = "/#~!@%;,"

_MODIFIER_FLAGS = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "x": re.VERBOSE,
    "u": 0,
}


@dataclass(frozen=True)
class CompiledPattern:
    """Result of compiling a rule pattern: exactly one field is set."""

    pattern: re.Pattern[str] | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.pattern is not None


def compile_rule_pattern(raw: str) -> CompiledPattern:
    """Compile a rule pattern without raising.

    Accepts a plain regular expression or a delimited literal with
    trailing modifiers, e.g. ``/^wp-/i``.
    """
    source, flags, error = _split_literal(raw.strip())
    if error:
        return CompiledPattern(error=error)
    try:
        return CompiledPattern(pattern=re.compile(source, flags))
    except re.error as e:
        return CompiledPattern(error=str(e))


def _split_literal(raw: str) -> tuple[str, int, str | None]:
    if len(raw) < 2 or raw[0] not in LITERAL_DELIMITERS:
        return raw, 0, None

    delimiter = raw[0]
    end = raw.rfind(delimiter)
    if end == 0:
        return raw, 0, None

    modifiers = raw[end + 1 :]
    if modifiers and not modifiers.isalpha():
        return raw, 0, None

    flags = 0
    for modifier in modifiers:
        if modifier not in _MODIFIER_FLAGS:
            return raw, 0, f"Unsupported pattern modifier: {modifier}"
        flags |= _MODIFIER_FLAGS[modifier]
    return raw[1:end], flags, None


class RuleEngine:
    """Applies a column's ``urlRules`` and ``specialCases`` to folder names.

    Problems with the configured rules never raise: they are appended to
    :attr:`errors` and the folder name is left unchanged. A folder that
    does not satisfy ``urlRules.match`` is skipped (``apply`` returns None).
    """

    def __init__(self, errors: list[str] | None = None) -> None:
        self._errors = errors if errors is not None else []
        self._compiled: dict[str, CompiledPattern] = {}

    @property
    def errors(self) -> list[str]:
        return self._errors

    def apply(self, folder_name: str, column: Column) -> str | None:
        """Return the display name for ``folder_name``, or None to skip it."""
        url_name = folder_name
        rules = column.url_rules

        if rules is not None and not rules.is_empty:
            match = rules.match.strip()
            replace = rules.replace.strip()

            if not match or not replace:
                self._error(
                    "Both urlRules.match and urlRules.replace must be set "
                    "(or both empty) for column",
                    column,
                )
            else:
                match_pattern = self._compile(match)
                if not match_pattern.ok:
                    self._error("Invalid regex in urlRules.match for column", column)
                elif match_pattern.pattern.search(folder_name):
                    replace_pattern = self._compile(replace)
                    if not replace_pattern.ok:
                        self._error("Invalid regex in urlRules.replace for column", column)
                    else:
                        url_name = replace_pattern.pattern.sub("", folder_name)
                else:
                    return None

        if url_name in column.special_cases:
            url_name = column.special_cases[url_name]

        return url_name

    def _compile(self, raw: str) -> CompiledPattern:
        if raw not in self._compiled:
            self._compiled[raw] = compile_rule_pattern(raw)
        return self._compiled[raw]

    def _error(self, message: str, column: Column) -> None:
        self._errors.append(f'{message} "{column.title}".')
