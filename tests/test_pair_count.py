import pytest

from codemerge.pair_count import PairCount, pair_key_split

GRAPHQL_KEYS = ["{}", "[]", "()", '""" """', '""']


def test_split_two_char_key():
    assert pair_key_split("{}") == ("{", "}")


def test_split_spaced_key():
    assert pair_key_split('""" """') == ('"""', '"""')


def test_split_invalid_key():
    with pytest.raises(ValueError):
        pair_key_split("abc")


def test_open_and_close_brace():
    counter = PairCount(keywords=["{}", "[]", "()"])
    assert counter.add("message Foo {") == "{}"
    assert not counter.is_zero()
    assert counter.add("}") == "{}"
    assert counter.is_zero()


def test_line_without_pairs():
    counter = PairCount(keywords=["{}", "[]", "()"])
    assert counter.add("string name = 1;") == ""
    assert counter.is_zero()


def test_unbalanced_parenthesis():
    counter = PairCount(keywords=["()"])
    assert counter.add("f(a)(b") == "()"
    assert not counter.is_zero()
    counter.add(")")
    assert counter.is_zero()


def test_balanced_line_keeps_zero():
    counter = PairCount(keywords=["{}", "[]", "()"])
    assert counter.add("option (a) = {b: [1]};") == "()"
    assert counter.is_zero()


def test_origin_text_suspends_other_pairs():
    counter = PairCount(keywords=GRAPHQL_KEYS, origin_text=['""" """'])
    assert counter.add('  """') == '""" """'
    assert not counter.is_zero()
    assert counter.add("  some text (unbalanced") == ""
    assert counter.add('  """') == '""" """'
    assert counter.is_zero()


def test_triple_quote_not_counted_as_single_quotes():
    counter = PairCount(keywords=GRAPHQL_KEYS, origin_text=['""" """'])
    counter.add('  """')
    assert counter.counts.get('""', 0) == 0


def test_quoted_string_on_one_line_is_balanced():
    counter = PairCount(keywords=GRAPHQL_KEYS, origin_text=['""" """'])
    assert counter.add('  "a short doc"') == '""'
    assert counter.is_zero()