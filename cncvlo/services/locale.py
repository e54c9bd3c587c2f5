"""Best-effort conversion of free-text locale strings (``cs_CZ.UTF-8``, ``en``)
into language tags.

A locale whose region is not known (``en_EN``) is reduced to its base language;
the region is dropped even when it would parse on its own.
"""

from dataclasses import dataclass

from babel import Locale, UnknownLocaleError


class LocaleParseError(ValueError):
    pass


@dataclass(frozen=True)
class LanguageTag:
    base: str
    region: str | None = None

    @property
    def display_name(self) -> str:
        return Locale(self.base).english_name or self.base

    def __str__(self) -> str:
        if self.region:
            return f"{self.base}-{self.region}"
        return self.base


def _parse_structured(value: str) -> LanguageTag:
    sep = "-" if "-" in value and "_" not in value else "_"
    locale = Locale.parse(value, sep=sep, resolve_likely_subtags=False)
    return LanguageTag(base=locale.language, region=locale.territory)


def parse_locale(value: str) -> LanguageTag:
    remainder = value.split(".", 1)[0].strip()
    try:
        return _parse_structured(remainder)
    except (ValueError, UnknownLocaleError):
        pass

    parts = remainder.split("_") if "_" in remainder else remainder.split("-")
    if len(parts) != 2:
        raise LocaleParseError(f"Cannot parse locale `{value}`")
    try:
        locale = Locale.parse(parts[0], resolve_likely_subtags=False)
    except (ValueError, UnknownLocaleError) as exc:
        raise LocaleParseError(f"Cannot parse locale `{value}`") from exc
    return LanguageTag(base=locale.language)
