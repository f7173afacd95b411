"""
Unit tests for FilteredView.
"""

import pytest

from tutoraid.models import PAID
from tutoraid.store import FilteredView, StudentStore, show_all


class TestFilteredView:
    """Test cases for live filtered views."""

    @pytest.fixture
    def store(self, amy, ben):
        return StudentStore([amy.with_payment_status(PAID), ben])

    @pytest.fixture
    def view(self, store):
        return FilteredView(store.all)

    def test_shows_everything_by_default(self, view):
        """Test the default predicate keeps every item in order."""
        assert [s.key for s in view] == ["Amy Tan", "Ben Lim"]
        assert len(view) == 2
        assert view.predicate is show_all

    def test_predicate_filters(self, view):
        """Test a predicate selects a subsequence."""
        view.set_predicate(lambda student: student.payment_status.has_paid)

        assert [s.key for s in view] == ["Amy Tan"]
        assert view[0].key == "Amy Tan"

    def test_view_is_live(self, view, store, make_student):
        """Test store changes show up without touching the view."""
        store.add(make_student("Cara Ng"))

        assert [s.key for s in view][-1] == "Cara Ng"

    def test_index_out_of_range(self, view):
        """Test indexing past the end."""
        with pytest.raises(IndexError):
            view[5]

    def test_listeners_receive_contents(self, view):
        """Test subscribers are pushed the filtered contents."""
        received = []
        view.subscribe(received.append)

        view.set_predicate(lambda student: student.key == "Ben Lim")
        view.refresh()

        assert len(received) == 2
        assert [s.key for s in received[-1]] == ["Ben Lim"]

    def test_unsubscribe(self, view):
        """Test an unsubscribed listener is no longer called."""
        received = []
        unsubscribe = view.subscribe(received.append)
        unsubscribe()
        unsubscribe()

        view.refresh()

        assert received == []
