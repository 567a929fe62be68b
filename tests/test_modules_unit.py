"""Unit tests for the Dublin Core and Syndication modules and the registry."""

from datetime import UTC, datetime

import pytest

from syndbind import rss
from syndbind.exceptions import CopyFromTypeError
from syndbind.georss import GEORSS_URI
from syndbind.modules import (
    DC_URI,
    SY_URI,
    DCModuleImpl,
    DCSubjectImpl,
    ModuleImpl,
    SyModuleImpl,
    clone_modules,
    create_module,
    get_module,
    lookup_module,
    module_is_empty,
    register_module,
)
from syndbind.synd_entry import SyndEntryImpl


class TestDCModuleUnit:
    """Unit tests for DCModuleImpl."""

    def test_singular_accessors_read_first_item(self):
        """Singular accessors expose the first element of each list."""
        module = DCModuleImpl()
        module.creators = ["Alice", "Bob"]

        assert module.creator == "Alice"
        assert module.date is None

    def test_singular_setter_replaces_list(self):
        """Assigning a singular value replaces the whole list."""
        module = DCModuleImpl()
        module.creators = ["Alice", "Bob"]
        module.creator = "Carol"
        assert module.creators == ["Carol"]

        module.rights = "CC BY"
        assert module.rights_list == ["CC BY"]

    def test_lists_are_never_none(self):
        """Every DC list reads as a list."""
        module = DCModuleImpl()
        module.subjects = None
        assert module.subjects == []
        assert module.languages == []

    def test_is_empty(self):
        """A module with no values is empty."""
        module = DCModuleImpl()
        assert module.is_empty()
        module.language = "en"
        assert not module.is_empty()

    def test_equality_ignores_singular_accessors(self):
        """Modules with the same lists are equal and hash alike."""
        a = DCModuleImpl()
        b = DCModuleImpl()
        a.date = datetime(2024, 1, 1, tzinfo=UTC)
        b.dates = [datetime(2024, 1, 1, tzinfo=UTC)]
        assert a == b
        assert hash(a) == hash(b)

    def test_clone_copies_subjects(self):
        """Cloning copies subject beans rather than sharing them."""
        module = DCModuleImpl()
        module.subject = DCSubjectImpl("Science", "http://example.com/tax")

        cloned = module.clone()
        cloned.subject.value = "Art"

        assert module.subject.value == "Science"

    def test_copy_from(self):
        """copy_from copies every DC list."""
        source = DCModuleImpl()
        source.creators = ["Alice"]
        source.subjects = [DCSubjectImpl("Science")]

        target = DCModuleImpl()
        target.copy_from(source)

        assert target == source
        assert target.subject is not source.subject

    def test_copy_from_other_module_raises(self):
        """A DC module cannot copy from another kind of module."""
        with pytest.raises(CopyFromTypeError):
            DCModuleImpl().copy_from(SyModuleImpl())


class TestSyModuleUnit:
    """Unit tests for SyModuleImpl."""

    def test_defaults(self):
        module = SyModuleImpl()
        assert module.uri == SY_URI
        assert module.update_period is None
        assert module.update_frequency == 0

    @pytest.mark.parametrize("period", ["hourly", "daily", "weekly", "monthly", "yearly"])
    def test_valid_update_periods(self, period):
        module = SyModuleImpl()
        module.update_period = period
        assert module.update_period == period

    def test_invalid_update_period_raises(self):
        """Only the standard update periods are accepted."""
        with pytest.raises(ValueError):
            SyModuleImpl().update_period = "fortnightly"


class TestModuleRegistryUnit:
    """Unit tests for module lookup and registration."""

    def test_create_registered_module(self):
        assert isinstance(create_module(DC_URI), DCModuleImpl)
        assert create_module("http://example.com/unknown") is None

    def test_get_module_finds_by_uri(self):
        dc = DCModuleImpl()
        sy = SyModuleImpl()
        assert get_module([dc, sy], SY_URI) is sy
        assert get_module(None, DC_URI) is None

    def test_lookup_attaches_registered_module(self):
        """Looking up a registered URI creates and attaches its module."""
        modules = []
        module = lookup_module(modules, SY_URI)

        assert isinstance(module, SyModuleImpl)
        assert modules == [module]
        assert lookup_module(modules, SY_URI) is module

    def test_lookup_unregistered_uri_returns_none(self):
        """Unregistered URIs yield None and leave the list alone."""
        modules = []
        assert lookup_module(modules, "http://example.com/unknown") is None
        assert modules == []

    def test_register_module(self):
        """Registered implementations are created on lookup."""

        class CustomModule(SyModuleImpl):
            URI = "http://example.com/custom"

        register_module(CustomModule.URI, CustomModule)
        module = lookup_module([], CustomModule.URI)
        assert isinstance(module, CustomModule)
        assert module.uri == "http://example.com/custom"

    def test_clone_modules(self):
        """Module lists are deep-cloned."""
        dc = DCModuleImpl()
        dc.creator = "Alice"

        cloned = clone_modules([dc])
        cloned[0].creator = "Bob"

        assert dc.creator == "Alice"
        assert clone_modules(None) == []

    def test_module_is_empty(self):
        dc = DCModuleImpl()
        assert module_is_empty(dc)
        dc.language = "en"
        assert not module_is_empty(dc)

        sy = SyModuleImpl()
        assert module_is_empty(sy)
        sy.update_period = "daily"
        assert not module_is_empty(sy)

    def test_module_without_emptiness_check_counts_as_set(self):
        class BareModule(ModuleImpl):
            URI = "http://example.com/bare"

        assert not module_is_empty(BareModule())

    def test_lookup_keeps_owners_equal(self):
        """Looking up a module that is not there leaves equality and hash alone."""
        first = SyndEntryImpl()
        first.title = "Entry"
        second = first.clone()

        first.get_module(SY_URI)
        first.get_module(GEORSS_URI)

        assert first == second
        assert hash(first) == hash(second)

    def test_filled_looked_up_module_counts(self):
        first = SyndEntryImpl()
        second = first.clone()

        first.get_module(SY_URI).update_period = "hourly"

        assert first != second

    def test_wire_item_lookup_keeps_equality(self):
        item = rss.Item()
        item.title = "Item"
        other = item.clone()

        item.get_module(SY_URI)

        assert item == other
        assert hash(item) == hash(other)
