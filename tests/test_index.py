"""Tests for LocalizationIndex."""

import pytest

from localization_index.core.errors import EmptyGroupError
from localization_index.core.index import LocalizationIndex, sort_localizations
from localization_index.core.models import (
    Filter,
    Group,
    Localization,
    SlotState,
    TranslationEntry,
)


def make_localization(language, values):
    """Build a localization from {key: value}."""
    entries = [TranslationEntry(key=k, value=v, message=f'comment {k}') for k, v in values.items()]
    return Localization(language=language, entries=entries)


def make_group():
    """Localizable.strings with base(3), en(3), fr(2, no k3)."""
    return Group(name='Localizable.strings', localizations=[
        make_localization('en', {'k1': 'One', 'k2': 'Two', 'k3': 'Three'}),
        make_localization('fr', {'k1': 'Un', 'k2': 'Deux'}),
        make_localization('Base', {'k1': 'One', 'k2': 'Two', 'k3': 'Three'}),
    ])


class TestSortLocalizations:
    """Test cases for sort_localizations()."""

    def test_base_first(self):
        """Base should sort first regardless of entry count."""
        group = Group(name='g', localizations=[
            make_localization('en', {'a': '1', 'b': '2', 'c': '3'}),
            make_localization('base', {'a': '1'}),
        ])
        ordered = sort_localizations(group.localizations)
        assert [loc.language for loc in ordered] == ['base', 'en']

    def test_by_descending_count(self):
        """Without base, the largest localization should come first."""
        group = Group(name='g', localizations=[
            make_localization('de', {'a': '1'}),
            make_localization('en', {'a': '1', 'b': '2'}),
        ])
        ordered = sort_localizations(group.localizations)
        assert [loc.language for loc in ordered] == ['en', 'de']

    def test_stable_for_ties(self):
        """Equal counts should keep their stored order."""
        group = Group(name='g', localizations=[
            make_localization('fr', {'a': '1'}),
            make_localization('de', {'a': '1'}),
        ])
        ordered = sort_localizations(group.localizations)
        assert [loc.language for loc in ordered] == ['fr', 'de']


class TestSelect:
    """Test cases for LocalizationIndex.select()."""

    def test_returns_sorted_languages(self):
        """Languages should be base first, then by entry count."""
        index = LocalizationIndex()
        assert index.select(make_group()) == ['Base', 'en', 'fr']

    def test_base_is_master(self):
        """Base should be the master even when another language is as large."""
        index = LocalizationIndex()
        index.select(make_group())
        assert index.master.language == 'Base'

    def test_languages_count(self):
        """languages_count should equal the group's localization count."""
        group = make_group()
        index = LocalizationIndex()
        index.select(group)
        assert index.languages_count == len(group.localizations)

    def test_one_slot_per_language(self):
        """Every row should have exactly languages_count slots."""
        index = LocalizationIndex()
        index.select(make_group())
        for key in index.filtered_keys:
            assert len(index.slots(key)) == index.languages_count

    def test_absent_language_slot(self):
        """A language without the key should hold a KNOWN_ABSENT slot."""
        index = LocalizationIndex()
        index.select(make_group())
        assert index.slot('k3', 'fr').state is SlotState.KNOWN_ABSENT
        assert index.slot('k3', 'en').state is SlotState.PRESENT
        assert index.slot('k3', 'en').entry.value == 'Three'

    def test_unknown_language_slot(self):
        """A language outside the group should report LANGUAGE_UNKNOWN."""
        index = LocalizationIndex()
        index.select(make_group())
        assert index.slot('k1', 'ja').state is SlotState.LANGUAGE_UNKNOWN

    def test_unknown_key_slot(self):
        """An unindexed key should return None."""
        index = LocalizationIndex()
        index.select(make_group())
        assert index.slot('nope', 'en') is None
        assert index.slots('nope') is None

    def test_keys_come_from_master_only(self):
        """Keys only present in a non-master localization are not indexed."""
        group = Group(name='g', localizations=[
            make_localization('base', {'a': '1', 'b': '2'}),
            make_localization('en', {'a': '1', 'extra': 'x'}),
        ])
        index = LocalizationIndex()
        index.select(group)
        assert index.keys() == ['a', 'b']

    def test_filtered_keys_computed(self):
        """select should leave filtered_keys computed with ALL."""
        index = LocalizationIndex()
        index.select(make_group())
        assert index.filtered_keys == ['k1', 'k2', 'k3']

    def test_replaces_previous_state(self):
        """Selecting another group should discard the previous rows."""
        index = LocalizationIndex()
        index.select(make_group())
        other = Group(name='Other.strings', localizations=[make_localization('en', {'x': 'X'})])
        assert index.select(other) == ['en']
        assert index.keys() == ['x']
        assert index.group is other

    def test_empty_group_fails(self):
        """A group without localizations should raise EmptyGroupError."""
        index = LocalizationIndex()
        with pytest.raises(EmptyGroupError):
            index.select(Group(name='Empty.strings'))


class TestFilterAndRows:
    """Test cases for filter and row lookup."""

    def test_missing_scenario(self):
        """fr lacks k3, so MISSING should return exactly k3."""
        index = LocalizationIndex()
        index.select(make_group())
        assert index.filter(Filter.MISSING) == ['k3']

    def test_filter_idempotent(self):
        """filter(ALL) twice should yield the same keys."""
        index = LocalizationIndex()
        index.select(make_group())
        first = list(index.filter(Filter.ALL))
        assert index.filter(Filter.ALL) == first

    def test_get_key_bounds(self):
        """Out of range rows should return None."""
        index = LocalizationIndex()
        index.select(make_group())
        assert index.get_key(0) == 'k1'
        assert index.get_key(3) is None
        assert index.get_key(-1) is None

    def test_get_row_for_key(self):
        """Row lookup should follow the filtered list."""
        index = LocalizationIndex()
        index.select(make_group())
        assert index.get_row_for_key('k2') == 1
        index.filter(Filter.MISSING)
        assert index.get_row_for_key('k2') is None
        assert index.get_row_for_key('k3') == 0


class TestRowEdits:
    """Test cases for set_row, put_entry and remove."""

    def test_set_row_fills_all_languages(self):
        """set_row should create one slot per language."""
        index = LocalizationIndex()
        index.select(make_group())
        index.set_row('k9', {'en': TranslationEntry('k9')})
        slots = index.slots('k9')
        assert list(slots) == ['Base', 'en', 'fr']
        assert slots['en'].is_present
        assert slots['fr'].state is SlotState.KNOWN_ABSENT

    def test_put_entry_marks_present(self):
        """put_entry should replace an absent slot."""
        index = LocalizationIndex()
        index.select(make_group())
        index.put_entry('fr', TranslationEntry('k3', 'Trois'))
        assert index.slot('k3', 'fr').entry.value == 'Trois'

    def test_put_entry_ignores_unindexed_key(self):
        """put_entry should not create rows."""
        index = LocalizationIndex()
        index.select(make_group())
        index.put_entry('fr', TranslationEntry('new', 'x'))
        assert 'new' not in index

    def test_remove(self):
        """remove should drop the row and tolerate unknown keys."""
        index = LocalizationIndex()
        index.select(make_group())
        index.remove('k1')
        index.remove('unknown')
        assert 'k1' not in index
        assert len(index) == 2

    def test_missing_count(self):
        """missing_count should count absent and blank slots."""
        index = LocalizationIndex()
        index.select(make_group())
        assert index.missing_count('fr') == 1
        assert index.missing_count('en') == 0
