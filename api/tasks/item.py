"""Task detail endpoint: view, edit, change status, delete (``?id=<task id>``)."""

from src.models.task import TaskStatus
from src.utils.errors import NotFoundError, ValidationError
from src.utils.http import JSONRequestHandler
from src.utils.logging_config import LoggingConfig
from src.views.session import require_user
from src.views.task_detail import TaskDetailView
from src.views.task_form import TaskForm

LoggingConfig.setup_logging()


class handler(JSONRequestHandler):
    """Vercel serverless function handler for /api/tasks/item."""

    def do_GET(self):
        self.dispatch(self._get)

    def do_PUT(self):
        """Edit task fields from the edit-task form."""
        self.dispatch(self._put)

    def do_PATCH(self):
        """Change status only: ``{"status": "completed"}``."""
        self.dispatch(self._patch)

    def do_DELETE(self):
        self.dispatch(self._delete)

    def _task_id(self) -> str:
        task_id = self.query_param("id")
        if not task_id:
            raise ValidationError("Missing task id")
        return task_id

    async def _open(self) -> TaskDetailView:
        view = await TaskDetailView.open(self.access_token(), self._task_id())
        if view.not_found:
            raise NotFoundError(view.error)
        return view

    def _respond(self, view: TaskDetailView, ok: bool):
        return (200 if ok else 502), view.to_dict()

    async def _get(self):
        view = await self._open()
        return self._respond(view, view.task is not None)

    async def _put(self):
        body = self.read_json()
        view = await self._open()
        form = TaskForm.from_input(body)
        ok = await view.edit(form)
        return self._respond(view, ok)

    async def _patch(self):
        body = self.read_json()
        try:
            status = TaskStatus(body.get("status"))
        except ValueError as e:
            raise ValidationError(f"Invalid status: {body.get('status')!r}") from e

        view = await self._open()
        ok = await view.update_status(status)
        return self._respond(view, ok)

    async def _delete(self):
        view = TaskDetailView(await require_user(self.access_token()), self._task_id())
        redirect = await view.delete()
        if redirect is None:
            return 502, view.to_dict()
        return 200, {"ok": True, "redirect": redirect}
