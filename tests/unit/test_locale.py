import pytest

from cncvlo.services.locale import LanguageTag, LocaleParseError, parse_locale


def test_parse_locale_with_region():
    assert parse_locale("en_US") == LanguageTag(base="en", region="US")


def test_parse_locale_strips_encoding_suffix():
    tag = parse_locale("cs_CZ.UTF-8")
    assert tag.base == "cs"
    assert tag.region == "CZ"
    assert str(tag) == "cs-CZ"


def test_parse_locale_accepts_dash_separator():
    assert parse_locale("cs-CZ") == LanguageTag(base="cs", region="CZ")


def test_parse_locale_bare_language():
    tag = parse_locale("cs")
    assert tag == LanguageTag(base="cs")
    assert tag.display_name == "Czech"


def test_parse_locale_unknown_region_falls_back_to_base():
    tag = parse_locale("en_EN")
    assert tag.base == "en"
    assert tag.region is None


@pytest.mark.parametrize("value", ["xx_YY_ZZ", "xx", "", "12_34"])
def test_parse_locale_rejects_garbage(value):
    with pytest.raises(LocaleParseError):
        parse_locale(value)
