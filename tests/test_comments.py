import pytest

from tmpltranslate.comments import (
    carve,
    prune_all_comments,
    prune_command_comments,
    prune_inline_comments,
)


def test_carve_first_region():
    assert carve("a{{b}}c{{d}}", "{{", "}}") == ("a", "b", "c{{d}}", True)


def test_carve_balances_nested_pairs():
    assert carve("x(a(b)c)y", "(", ")") == ("x", "a(b)c", "y", True)


def test_carve_without_region():
    assert carve("abc", "(", ")") == ("abc", "", "", False)


def test_carve_unbalanced_region():
    assert carve("a(b(c)", "(", ")") == ("a(b(c)", "", "", False)


def test_annotation_only_action_keeps_trim_markers():
    assert prune_all_comments("{{- _ /* screen reader only */ -}}") == "{{- -}}"


def test_command_annotation_is_removed():
    text = '<p>{{ _ "Hello" /* greeting */ }}</p>'
    assert prune_command_comments(text) == '<p>{{ _ "Hello" }}</p>'


def test_plain_actions_are_untouched():
    text = '<h1>{{ .Title }}</h1>\n{{ _ "Hello %[1]s" $.Name }}\n{{/* plain comment */}}'
    assert prune_all_comments(text) == text


def test_inline_annotation_is_removed():
    text = '{{ printf "%s" (_ "Hello" /* greeting */) }}'
    assert prune_inline_comments(text) == '{{ printf "%s" (_ "Hello" ) }}'
    assert prune_command_comments(text) == text


def test_inline_annotation_in_deeper_parens():
    text = '{{ a (b (_ "x" /* y */)) }}'
    assert prune_all_comments(text) == '{{ a (b (_ "x" )) }}'


def test_parens_outside_actions_are_untouched():
    text = 'a (_ "x" /* y */) b'
    assert prune_all_comments(text) == text


@pytest.mark.parametrize(
    "text",
    [
        "{{- _ /* screen reader only */ -}}",
        '{{ _ "a" /* b */ }} and {{ f (_ "c" /* d */) }}',
        "{{ unbalanced (_ x /* y */ }}",
        "{{ _ x */ }}",
        "",
    ],
)
def test_pruning_is_idempotent(text):
    once = prune_all_comments(text)
    assert prune_all_comments(once) == once
