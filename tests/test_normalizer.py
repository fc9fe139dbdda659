import pytest

from intentpy.nlu import detect_language, has_sensitive_content, normalize_input


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("  show   me  sales ", "show sales"),
        ("Please go to settings", "navigate to settings"),
        ("could you open the dasboard", "navigate to the dashboard"),
        ("take me to my proflie", "navigate to my profile"),
        ("look for invoices", "search for invoices"),
        ("order by date", "sort date"),
        ("display the report", "show the reports"),
        ("show reports", "show reports"),
        ("", ""),
    ],
)
def test_normalize_input(raw, expected):
    assert normalize_input(raw) == expected


def test_only_first_synonym_is_applied():
    # "navigate to" must not be rewritten again by the "navigate" rule
    assert normalize_input("go to settings") == "navigate to settings"


def test_sensitive_content_detection():
    assert has_sensitive_content("reset my Password")
    assert has_sensitive_content("use my credit card")
    assert not has_sensitive_content("show passwords page")
    assert not has_sensitive_content("show sales")


@pytest.mark.parametrize(
    "text, lang",
    [
        ("show me the sales for the month", "en"),
        ("muestra los datos para el mes", "es"),
        ("zeige die Daten und das Diagramm", "de"),
        ("xyz", "en"),
    ],
)
def test_detect_language(text, lang):
    assert detect_language(text) == lang
