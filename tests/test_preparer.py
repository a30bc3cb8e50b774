"""
Tests for command preparation from KEY=VALUE declarations.
Covers declaration parsing, lenient token omission and the simple mode.
"""

import logging

import pytest

from cmdexpand.exceptions import UndefinedVariableError
from cmdexpand.exec.preparer import (
    CommandPreparer,
    evaluate,
    parse_env_declarations,
    prepare_commands,
)


class TestParseEnvDeclarations:

    def test_splits_on_first_equals(self):
        assert parse_env_declarations(['key=value=with=equals']) == {'key': 'value=with=equals'}

    def test_empty_value_maps_to_empty_string(self):
        assert parse_env_declarations(['key=']) == {'key': ''}

    def test_malformed_entries_are_discarded(self, caplog):
        with caplog.at_level(logging.DEBUG, logger='cmdexpand.exec.preparer'):
            env = parse_env_declarations(['novalue', '=key=value', 'ok=1'])
        assert env == {'ok': '1'}
        assert 'novalue' in caplog.text

    def test_later_declarations_win(self):
        assert parse_env_declarations(['A=1', 'A=2']) == {'A': '2'}

    def test_none(self):
        assert parse_env_declarations(None) == {}


class TestPrepareCommandsAdvanced:

    @pytest.mark.parametrize("declarations,expected", [
        (['key=value'], ['value']),
        (['key=value=with=equals'], ['value=with=equals']),
        (['key='], []),
        (['=key=value'], []),
    ])
    def test_declaration_edge_cases(self, declarations, expected):
        assert prepare_commands(['$key'], declarations, True) == expected

    def test_token_order_preserved(self):
        result = prepare_commands(
            ['cov-build', '--dir', '$IDIR', '$BUILD'],
            ['IDIR=/tmp/idir', 'BUILD=make -j4'],
            True,
        )
        assert result == ['cov-build', '--dir', '/tmp/idir', 'make', '-j4']

    def test_quoted_token_stays_whole(self):
        assert prepare_commands(['"$BUILD"'], ['BUILD=make -j4'], True) == ['make -j4']

    def test_failed_token_is_omitted_with_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger='cmdexpand.exec.preparer'):
            result = prepare_commands(
                ['echo', '$A', "'open", 'done'],
                ['A=$B', 'B=$A'],
                True,
            )
        assert result == ['echo', 'done']
        assert 'Cyclic' in caplog.text

    def test_recursive_declarations(self):
        assert prepare_commands(['$OUT'], ['OUT=$ROOT/out', 'ROOT=/work'], True) == ['/work/out']


class TestPrepareCommandsSimple:

    def test_direct_substitution(self):
        assert prepare_commands(['$key'], ['key=value=with=equals'], False) == ['value=with=equals']

    def test_unresolved_left_in_place(self):
        assert prepare_commands(['$key'], ['=key=value'], False) == ['$key']

    def test_empty_value_elided(self):
        assert prepare_commands(['a', '$key'], ['key='], False) == ['a']

    def test_no_word_splitting_or_recursion(self):
        result = prepare_commands(['$A', '$S'], ['A=$B', 'B=x', 'S=a b'], False)
        assert result == ['$B', 'a b']


class TestEvaluate:

    def test_advanced_joins_tokens(self):
        assert evaluate('"$S"  $S', {'S': 'a b'}) == 'a b a b'

    def test_advanced_is_strict(self):
        with pytest.raises(UndefinedVariableError):
            evaluate('$MISSING', {})

    def test_simple_never_fails(self):
        assert evaluate('$MISSING $S', {'S': 'a  b'}, use_advanced_parser=False) == '$MISSING a  b'

    def test_instance_reuse_is_stateless(self):
        preparer = CommandPreparer()
        first = preparer.prepare(['$A'], ['A=1'])
        second = preparer.prepare(['$A'], ['A=2'])
        assert (first, second) == (['1'], ['2'])


def test_deep_chain_token_is_omitted():
    declarations = [f'V{i}=$V{i + 1}' for i in range(1500)] + ['V1500=end']
    assert prepare_commands(['run', '$V0'], declarations, True) == ['run']


def test_simple_mode_leaves_text_without_keys_unchanged():
    assert prepare_commands(['a$$b', 'cost $', '${'], [], False) == ['a$$b', 'cost $', '${']
