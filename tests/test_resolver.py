"""Tests for variable resolution and cycle detection."""

import pytest

from cmdexpand.exceptions import CyclicReferenceError, UndefinedVariableError
from cmdexpand.variables.resolver import VariableResolver


class TestVariableResolver:

    def test_returns_raw_value(self):
        resolver = VariableResolver()
        assert resolver.resolve('A', {'A': '$B'}) == '$B'

    def test_names_are_case_sensitive(self):
        resolver = VariableResolver()
        with pytest.raises(UndefinedVariableError):
            resolver.resolve('abc', {'ABC': '1'})

    def test_undefined(self):
        with pytest.raises(UndefinedVariableError) as exc_info:
            VariableResolver().resolve('MISSING', {})
        assert exc_info.value.name == 'MISSING'

    def test_cycle_checked_before_lookup(self):
        # Even an undefined name reports the cycle when it is on the chain
        with pytest.raises(CyclicReferenceError) as exc_info:
            VariableResolver().resolve('A', {}, chain=('A', 'B'))
        assert exc_info.value.chain == ['A', 'B']

    def test_empty_value_is_defined(self):
        assert VariableResolver().resolve('EMPTY', {'EMPTY': ''}) == ''

    def test_lookup_stringifies_scalars(self):
        resolver = VariableResolver()
        assert resolver.lookup('FLAG', {'FLAG': True}) == 'true'
        assert resolver.lookup('N', {'N': 3}) == '3'
        assert resolver.lookup('NONE', {'NONE': None}) is None
        assert resolver.lookup('MISSING', {}) is None
