"""Tests for EditorProject commit, undo/redo and selection history."""

from tests.pool_test_helpers import make_object
from vtpool.document import MAX_UNDO_REDO_POOL, MAX_UNDO_REDO_SELECTED, EditorProject
from vtpool.pool import ObjectType


def _add_button(project, object_id):
    project.staging.add(make_object(ObjectType.BUTTON, object_id))
    return project.commit()


class TestCommit:
    """Tests for update_pool / commit."""

    def test_new_project_is_clean(self, project):
        assert not project.is_dirty()
        assert not project.undo_available()
        assert not project.redo_available()

    def test_staging_edit_marks_dirty(self, project):
        project.staging.add(make_object(ObjectType.BUTTON, 6000))
        assert project.is_dirty()
        assert 6000 not in project.pool

    def test_commit_promotes_staging(self, project):
        assert _add_button(project, 6000)
        assert 6000 in project.pool
        assert not project.is_dirty()
        assert project.undo_available()

    def test_commit_without_change_is_noop(self, project):
        assert not project.commit()
        assert not project.undo_available()

    def test_committed_pool_is_independent_of_staging(self, project):
        _add_button(project, 6000)
        project.staging.object_by_id(6000)["width"] = 99
        assert project.pool.object_by_id(6000)["width"] == 0


class TestUndoRedo:
    """Tests for pool history."""

    def test_undo_restores_previous_pool(self, project, basic_pool):
        _add_button(project, 6000)
        project.undo()
        assert project.pool == basic_pool
        assert project.staging == basic_pool
        assert project.redo_available()

    def test_redo_reapplies(self, project):
        _add_button(project, 6000)
        project.undo()
        project.redo()
        assert 6000 in project.pool
        assert 6000 in project.staging
        assert not project.redo_available()

    def test_undo_discards_uncommitted_staging(self, project):
        _add_button(project, 6000)
        project.staging.add(make_object(ObjectType.BUTTON, 6001))
        project.undo()
        assert 6001 not in project.staging

    def test_new_commit_clears_redo(self, project):
        _add_button(project, 6000)
        project.undo()
        _add_button(project, 6001)
        assert not project.redo_available()

    def test_undo_on_empty_history_is_noop(self, project, basic_pool):
        project.undo()
        project.redo()
        assert project.pool == basic_pool

    def test_history_is_bounded(self, basic_pool):
        project = EditorProject.from_pool(basic_pool)
        for i in range(MAX_UNDO_REDO_POOL + 5):
            _add_button(project, 6000 + i)

        undone = 0
        while project.undo_available():
            project.undo()
            undone += 1
        assert undone == MAX_UNDO_REDO_POOL
        # The oldest states fell off; the earliest reachable one has 5 buttons.
        assert len(project.pool.objects_by_type(ObjectType.BUTTON)) == 5

    def test_custom_depth(self, basic_pool):
        project = EditorProject.from_pool(basic_pool, pool_depth=2)
        for i in range(4):
            _add_button(project, 6000 + i)
        project.undo()
        project.undo()
        project.undo()
        assert len(project.pool.objects_by_type(ObjectType.BUTTON)) == 2

    def test_redo_after_many_undos(self, project):
        for i in range(3):
            _add_button(project, 6000 + i)
        for _ in range(3):
            project.undo()
        for _ in range(3):
            project.redo()
        assert {6000, 6001, 6002} <= set(project.pool.ids())


class TestSelection:
    """Tests for staged selection and its history."""

    def test_select_is_staged(self, project):
        project.select(1000)
        assert project.staging_selected == 1000
        assert project.selected is None
        assert project.update_selected()
        assert project.selected == 1000
        assert project.selected_object().object_type == ObjectType.DATA_MASK

    def test_unchanged_selection_not_recorded(self, project):
        project.select(1000)
        project.update_selected()
        assert not project.update_selected()

    def test_previous_and_next(self, project):
        for object_id in (0, 1000):
            project.select(object_id)
            project.update_selected()

        project.set_previous_selected()
        assert project.selected == 0
        assert project.staging_selected == 0
        project.set_previous_selected()
        assert project.selected is None
        project.set_next_selected()
        project.set_next_selected()
        assert project.selected == 1000

    def test_clearing_selection_not_pushed(self, project):
        project.select(1000)
        project.update_selected()
        project.select(None)
        project.update_selected()
        assert project.selected is None

        project.set_previous_selected()
        # History holds only the state before 1000 was selected.
        assert project.selected is None
        project.set_previous_selected()
        assert project.selected is None

    def test_selection_history_bounded(self, basic_pool):
        project = EditorProject.from_pool(basic_pool)
        for i in range(MAX_UNDO_REDO_SELECTED + 5):
            project.select(6000 + i)
            project.update_selected()

        steps = 0
        previous = project.selected
        while True:
            project.set_previous_selected()
            if project.selected == previous:
                break
            previous = project.selected
            steps += 1
        assert steps == MAX_UNDO_REDO_SELECTED
        assert project.selected == 6000 + 4

    def test_selection_independent_of_pool_undo(self, button_project):
        _add_button(button_project, 6001)
        button_project.undo()
        assert button_project.selected == 6000

    def test_selected_object_missing(self, project):
        project.select(9999)
        project.update_selected()
        assert project.selected_object() is None
