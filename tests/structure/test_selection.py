"""
Tests for session selection and expansion state.
"""

from comptree.structure import SelectionState


class TestSelectionState:
    """Test the selection state object."""

    def test_starts_empty(self):
        state = SelectionState()
        assert state.selected_component_id is None
        assert state.expanded_component_ids == set()

    def test_toggle(self):
        state = SelectionState()
        assert state.toggle("a") is True
        assert state.is_expanded("a")
        assert state.toggle("a") is False
        assert not state.is_expanded("a")

    def test_prune_clears_removed_selection(self):
        """Test selection pointing into a removed subtree is cleared."""
        state = SelectionState(selected_component_id="b", expanded_component_ids={"a", "b"})

        assert state.prune(["b", "c"]) is True
        assert state.selected_component_id is None
        assert state.expanded_component_ids == {"a"}

    def test_prune_keeps_surviving_selection(self):
        state = SelectionState(selected_component_id="a")

        assert state.prune(["b"]) is False
        assert state.selected_component_id == "a"

    def test_expand_all_collapse_all_reset(self):
        state = SelectionState(selected_component_id="a")

        state.expand_all(["a", "b"])
        assert state.expanded_component_ids == {"a", "b"}

        state.collapse_all()
        assert state.expanded_component_ids == set()

        state.reset()
        assert state.selected_component_id is None
