from taskboard.client.views import (
    STATUS_FILTERS,
    all_tags,
    default_task_list,
    filter_tasks,
    move_task,
    parse_tags,
    tasks_for_view,
)

TASKS = [
    {"id": "a", "taskListId": "L", "order": 2, "title": "Buy milk", "description": "", "status": "incomplete", "tags": ["home"]},
    {"id": "b", "taskListId": "L", "order": 0, "title": "Write report", "description": "Quarterly MILK numbers", "status": "pending", "tags": ["work", "urgent"]},
    {"id": "c", "taskListId": "L", "order": 1, "title": "Call mom", "description": "", "status": "complete", "tags": ["home", "urgent"]},
    {"id": "d", "taskListId": "M", "order": 0, "title": "Elsewhere", "description": "", "status": "incomplete", "tags": []},
]


def ids(tasks):
    return [task["id"] for task in tasks]


def test_tasks_for_view_sorted_by_order():
    assert ids(tasks_for_view(TASKS, "L")) == ["b", "c", "a"]
    assert tasks_for_view(TASKS, None) == []


def test_search_is_case_insensitive_over_title_and_description():
    assert ids(filter_tasks(TASKS, search="milk")) == ["a", "b"]


def test_all_selected_tags_required():
    assert ids(filter_tasks(TASKS, tags=["home", "urgent"])) == ["c"]
    assert ids(filter_tasks(TASKS, tags=["home"])) == ["a", "c"]


def test_status_filter():
    assert ids(filter_tasks(TASKS, status="pending")) == ["b"]
    assert len(filter_tasks(TASKS, status="all")) == len(TASKS)
    assert STATUS_FILTERS == ("all", "incomplete", "pending", "complete")


def test_all_tags_sorted_unique():
    assert all_tags(TASKS) == ["home", "urgent", "work"]


def test_parse_tags():
    assert parse_tags(" a, b,, c ,") == ["a", "b", "c"]
    assert parse_tags("") == []


class TestMoveTask:
    view = [{"id": "a"}, {"id": "b"}, {"id": "c"}]

    def test_move_down(self):
        assert move_task(self.view, "a", "c") == ["b", "c", "a"]

    def test_move_up(self):
        assert move_task(self.view, "c", "a") == ["c", "a", "b"]

    def test_noop(self):
        assert move_task(self.view, "a", "a") is None
        assert move_task(self.view, "a", "missing") is None


def test_default_task_list():
    lists = [{"id": "first"}, {"id": "default"}]

    assert default_task_list(lists, {"defaultTaskListId": "default"}) == {"id": "default"}
    assert default_task_list(lists, {"defaultTaskListId": "gone"}) == {"id": "first"}
    assert default_task_list(lists, None) == {"id": "first"}
    assert default_task_list([], {"defaultTaskListId": "default"}) is None
