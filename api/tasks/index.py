"""Dashboard endpoint: list the user's tasks by status, create new tasks."""

from src.utils.http import JSONRequestHandler
from src.utils.logging_config import LoggingConfig
from src.views.dashboard import DashboardView
from src.views.task_form import TaskForm

LoggingConfig.setup_logging()


class handler(JSONRequestHandler):
    """Vercel serverless function handler for /api/tasks."""

    def do_GET(self):
        """Dashboard state: user greeting plus pending / in-progress / completed columns."""
        self.dispatch(self._get)

    def do_POST(self):
        """Create a task from the create-task form and return the refreshed dashboard."""
        self.dispatch(self._post)

    async def _get(self):
        view = await DashboardView.open(self.access_token())
        return (502 if view.error else 200), view.to_dict()

    async def _post(self):
        body = self.read_json()
        view = await DashboardView.open(self.access_token())
        form = TaskForm.from_input(body)

        task = await view.create_task(form)
        if task is None:
            return 502, view.to_dict()
        return 201, {**view.to_dict(), "created_id": task.id}
