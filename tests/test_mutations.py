"""Tests for MutationCoordinator with in-memory localizations."""

import pytest
from unittest.mock import MagicMock

from localization_index.core.index import LocalizationIndex
from localization_index.core.models import Group, Localization, SlotState, TranslationEntry
from localization_index.core.mutations import MutationCoordinator
from localization_index.providers.strings import StringsFileProvider


def make_group():
    return Group(name='Localizable.strings', localizations=[
        Localization('base', [TranslationEntry('a', 'A', 'msg a'), TranslationEntry('b', 'B')]),
        Localization('en', [TranslationEntry('a', 'A')]),
        Localization('de', [TranslationEntry('a', 'A-de'), TranslationEntry('b', 'B-de')]),
    ])


def make_coordinator(provider=None):
    index = LocalizationIndex()
    index.select(make_group())
    return MutationCoordinator(provider or StringsFileProvider(), index), index


class TestAddLocalizationKey:
    """Test cases for add_localization_key()."""

    def test_one_slot_per_language(self):
        """The added row should hold a present slot for every language."""
        coordinator, index = make_coordinator()
        coordinator.add_localization_key('c', 'ctx')

        slots = index.slots('c')
        assert len(slots) == index.languages_count == 3
        for language, slot in slots.items():
            assert slot.is_present
            assert slot.entry.value == ''
            assert slot.entry.message == 'ctx'

    def test_entries_added_to_every_localization(self):
        """Every localization should contain the new entry."""
        coordinator, index = make_coordinator()
        coordinator.add_localization_key('c', None)
        for localization in index.group.localizations:
            assert localization.entry_for('c') is not None

    def test_provider_called_per_localization(self):
        """The provider should be asked once per localization."""
        provider = MagicMock()
        provider.add_key_to_localization.side_effect = (
            lambda localization, key, message: TranslationEntry(key, '', message)
        )
        coordinator, index = make_coordinator(provider)
        coordinator.add_localization_key('c', 'ctx')
        assert provider.add_key_to_localization.call_count == 3

    def test_failure_leaves_index_untouched(self):
        """If the provider fails midway the row is not installed."""
        provider = MagicMock()
        provider.add_key_to_localization.side_effect = [TranslationEntry('c'), OSError('boom')]
        coordinator, index = make_coordinator(provider)
        with pytest.raises(OSError):
            coordinator.add_localization_key('c', None)
        assert 'c' not in index


class TestUpdateLocalization:
    """Test cases for update_localization()."""

    def test_update_existing(self):
        """The slot should reflect the new value."""
        coordinator, index = make_coordinator()
        entry = coordinator.update_localization('de', 'a', 'Neu', None)
        assert entry.value == 'Neu'
        assert index.slot('a', 'de').entry.value == 'Neu'

    def test_update_fills_absent_slot(self):
        """Updating an absent (key, language) should make the slot present."""
        coordinator, index = make_coordinator()
        assert index.slot('b', 'en').state is SlotState.KNOWN_ABSENT
        coordinator.update_localization('en', 'b', 'B-en', None)
        assert index.slot('b', 'en').entry.value == 'B-en'

    def test_unknown_language_is_noop(self):
        """An unknown language should not reach the provider."""
        provider = MagicMock()
        coordinator, index = make_coordinator(provider)
        assert coordinator.update_localization('fr', 'a', 'x', None) is None
        provider.update_localization.assert_not_called()


class TestDeleteLocalization:
    """Test cases for delete_localization()."""

    def test_delete_everywhere(self):
        """The key should be removed from all localizations and the index."""
        coordinator, index = make_coordinator()
        coordinator.delete_localization('a')
        assert 'a' not in index
        for localization in index.group.localizations:
            assert localization.entry_for('a') is None

    def test_filtered_keys_not_recomputed(self):
        """Deleting should leave filtered_keys as they were."""
        coordinator, index = make_coordinator()
        coordinator.delete_localization('a')
        assert index.filtered_keys == ['a', 'b']
        assert index.filter() == ['b']
