from docgen.services.template_engine import extract_placeholders, highlight_variables, substitute


def test_missing_placeholder_is_marked():
    assert substitute("Hello {{x}}", {}) == "Hello [MISSING_VALUE]"


def test_values_are_not_expanded_twice():
    assert substitute("{{a}}", {"a": "{{b}}", "b": "c"}) == "{{b}}"


def test_every_covered_placeholder_is_replaced():
    content = "{{greeting}} {{name}}, your total is {{total}}. {{greeting}} again!"
    result = substitute(content, {"greeting": "Hi", "name": "Ann", "total": 12.5})
    assert result == "Hi Ann, your total is 12.5. Hi again!"
    assert "{{" not in result


def test_none_becomes_empty_string_and_booleans_render_lowercase():
    assert substitute("[{{a}}][{{b}}][{{c}}][{{d}}]", {"a": None, "b": True, "c": False, "d": 0}) == "[][true][false][0]"


def test_unused_keys_and_plain_content_are_untouched():
    assert substitute("No placeholders here.", {"unused": "x"}) == "No placeholders here."
    assert substitute("", {"a": "b"}) == ""
    assert substitute(None, {}) == ""


def test_extract_placeholders_keeps_first_appearance_order():
    assert extract_placeholders("{{b}} and {{a}} then {{b}} {{ c }} {{}}") == ["b", "a", " c "]


def test_highlight_marks_filled_and_missing_values_and_escapes_text():
    html = highlight_variables("Hi {{name}} & {{x}}", {"name": "<Ann>"})
    assert html == (
        'Hi <mark class="var-filled" data-key="name">&lt;Ann&gt;</mark> &amp; '
        '<mark class="var-missing" data-key="x">{{x}}</mark>'
    )
