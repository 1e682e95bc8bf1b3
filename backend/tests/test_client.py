"""客户端本地状态测试：乐观更新与失败处理。"""
import pytest

from goal_tracker.client import GoalTrackerClient

JPEG = ("proof.jpg", b"\xff\xd8fake\xff\xd9", "image/jpeg")


@pytest.fixture
def app_client(alice_client):
    client = GoalTrackerClient(alice_client)
    client.refresh()
    return client


class TestGoalTrackerClient:
    """GoalTrackerClient 测试类"""

    def test_refresh_loads_state(self, app_client):
        assert app_client.tasks == []
        assert app_client.photos == []
        assert app_client.ads_removed is False

    def test_add_task_prepends(self, app_client):
        app_client.add_task("First")
        app_client.add_task("Second")
        assert [t.title for t in app_client.tasks] == ["Second", "First"]
        assert app_client.tasks[0].subtasks == []

    def test_blank_title_is_not_sent(self, app_client):
        assert app_client.add_task("   ") is None
        assert app_client.tasks == []

    def test_add_subtask_appends_locally(self, app_client):
        task = app_client.add_task("Goal")
        app_client.add_subtask(task.id, "one")
        app_client.add_subtask(task.id, "two")
        assert [s.title for s in app_client.tasks[0].subtasks] == ["one", "two"]

    def test_local_state_matches_server(self, app_client):
        task = app_client.add_task("Goal")
        subtask = app_client.add_subtask(task.id, "one")
        app_client.toggle_subtask(task.id, subtask.id, True)

        local = [t.model_dump() for t in app_client.tasks]
        assert local == [t.model_dump() for t in app_client.fetch_tasks()]

    def test_toggle_with_photo_refreshes_gallery(self, app_client):
        task = app_client.add_task("Goal")
        subtask = app_client.add_subtask(task.id, "one")

        updated = app_client.toggle_subtask(task.id, subtask.id, True, photo=JPEG)
        assert updated.completed is True
        assert app_client.tasks[0].subtasks[0].photo_url == updated.photo_url
        assert [p.id for p in app_client.photos] == [subtask.id]
        assert app_client.photos[0].task_title == "Goal"

        groups = app_client.gallery()
        assert sum(len(g) for g in groups.values()) == 1

    def test_uncomplete_drops_photo_locally(self, app_client):
        task = app_client.add_task("Goal")
        subtask = app_client.add_subtask(task.id, "one")
        app_client.toggle_subtask(task.id, subtask.id, True, photo=JPEG)

        app_client.toggle_subtask(task.id, subtask.id, False)
        assert app_client.photos == []
        assert app_client.tasks[0].subtasks[0].completed is False

    def test_delete_task_removes_locally(self, app_client):
        keep = app_client.add_task("Keep")
        drop = app_client.add_task("Drop")
        assert app_client.delete_task(drop.id) is True
        assert [t.id for t in app_client.tasks] == [keep.id]

    def test_failed_request_leaves_state(self, app_client, bob_client):
        foreign = GoalTrackerClient(bob_client).add_task("Bob's")

        assert app_client.delete_task(foreign.id) is False
        assert app_client.add_subtask(foreign.id, "sneaky") is None
        assert app_client.tasks == []

    def test_remove_ads(self, app_client):
        assert app_client.remove_ads() is True
        assert app_client.fetch_settings() is True

    def test_anonymous_client(self, anonymous_client):
        client = GoalTrackerClient(anonymous_client)
        assert client.ads_removed is True
        client.refresh()
        assert client.ads_removed is False
        assert client.tasks == []
        assert client.login_url().startswith("https://accounts.google.com/")

    def test_logout_clears_state(self, app_client):
        app_client.add_task("Goal")
        assert app_client.logout() is True
        assert app_client.tasks == []
        assert app_client.me() is None
