# shapecanvas/remote.py
"""
Client of the remote painting store.

``PaintingStore`` performs blocking JSON-over-HTTP calls. ``AsyncPaintingStore``
runs them on the Qt thread pool so that the canvas stays interactive, and
reports the outcome through signals.
"""

import json
import logging
import urllib.error
import urllib.parse
import urllib.request

from PyQt5.QtCore import QObject, QRunnable, QThreadPool, pyqtSignal

from .errors import InvalidFormatError, NetworkError, NotFoundError
from .serializer import Scene, from_document, to_document

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10


class PaintingStore:
    """Synchronous client; every call names the acting user explicitly."""

    def __init__(self, base_url: str, timeout: float = DEFAULT_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    # ------------------------------------------------------------------
    def _url(self, path: str, **query) -> str:
        url = self.base_url + path
        if query:
            url += "?" + urllib.parse.urlencode(query)
        return url

    def _request(self, method: str, path: str, payload=None, **query):
        url = self._url(path, **query)
        data = None
        req = urllib.request.Request(url, method=method)
        req.add_header("Accept", "application/json")
        if payload is not None:
            data = json.dumps(payload).encode("utf-8")
            req.add_header("Content-Type", "application/json")
        logger.debug(f"{method} {url}")
        try:
            with urllib.request.urlopen(
                req, data=data, timeout=self.timeout
            ) as response:
                body = response.read()
        except urllib.error.HTTPError as e:
            if e.code == 404:
                raise NotFoundError(f"{method} {path}: not found") from e
            raise NetworkError(
                f"{method} {path} failed with status {e.code}", status=e.code
            ) from e
        except (urllib.error.URLError, OSError) as e:
            raise NetworkError(f"{method} {path} failed: {e}") from e
        if not body:
            return None
        try:
            return json.loads(body.decode("utf-8"))
        except ValueError as e:
            raise InvalidFormatError(
                f"{method} {path} returned invalid JSON"
            ) from e

    # ------------------------------------------------------------------
    def check_user_exists(self, username: str) -> bool:
        try:
            self._request("GET", f"/users/{urllib.parse.quote(username)}")
        except NotFoundError:
            return False
        return True

    def create_user(self, username: str):
        self._request("POST", "/users", {"username": username})

    def list_paintings(self, username: str) -> list:
        data = self._request("GET", "/paintings", username=username)
        if not isinstance(data, list):
            raise InvalidFormatError("painting list must be a JSON array")
        paintings = []
        for entry in data:
            if not isinstance(entry, dict) or "id" not in entry:
                raise InvalidFormatError("painting list entry without id")
            paintings.append({"id": entry["id"], "name": entry.get("name")})
        return paintings

    def get_painting(self, painting_id, username: str) -> Scene:
        data = self._request(
            "GET", f"/paintings/{painting_id}", username=username
        )
        return from_document(data)

    def create_painting(self, username: str, scene: Scene) -> dict:
        data = self._request(
            "POST",
            "/paintings",
            {"username": username, "painting": to_document(scene)},
        )
        if not isinstance(data, dict) or "id" not in data:
            raise InvalidFormatError("create painting answer without id")
        return {"id": data["id"]}

    def update_painting(self, painting_id, username: str, scene: Scene):
        self._request(
            "PUT",
            f"/paintings/{painting_id}",
            {"username": username, "painting": to_document(scene)},
        )


# ---------------------------------------------------------------------------
class StoreTaskSignals(QObject):
    """Signals for StoreTask"""

    succeeded = pyqtSignal(str, object)  # operation, result
    failed = pyqtSignal(str, object)  # operation, exception


class StoreTask(QRunnable):
    """Background call of one ``PaintingStore`` method."""

    def __init__(self, store: PaintingStore, operation: str, *args):
        super().__init__()
        self.store = store
        self.operation = operation
        self.args = args
        self.signals = StoreTaskSignals()
        self.done = False

    def run(self):
        try:
            result = getattr(self.store, self.operation)(*self.args)
        except Exception as e:
            logger.warning(f"Store call {self.operation} failed: {e}")
            self.done = True
            self.signals.failed.emit(self.operation, e)
            return
        self.done = True
        self.signals.succeeded.emit(self.operation, result)


class AsyncPaintingStore(QObject):
    """Runs store calls off the UI thread.

    Requests are never cancelled; two saves in flight both reach the server
    and the last one wins.
    """

    succeeded = pyqtSignal(str, object)
    failed = pyqtSignal(str, object)

    OPERATIONS = (
        "check_user_exists",
        "create_user",
        "list_paintings",
        "get_painting",
        "create_painting",
        "update_painting",
    )

    def __init__(self, store: PaintingStore, parent=None, thread_pool=None):
        super().__init__(parent)
        self.store = store
        self.thread_pool = thread_pool or QThreadPool.globalInstance()
        self._tasks = set()

    def make_task(self, operation: str, *args) -> StoreTask:
        if operation not in self.OPERATIONS:
            raise ValueError(f"unknown store operation: {operation}")
        task = StoreTask(self.store, operation, *args)
        task.setAutoDelete(False)
        task.signals.succeeded.connect(self.succeeded)
        task.signals.failed.connect(self.failed)
        # keep tasks referenced until they have run
        self._tasks = {t for t in self._tasks if not t.done}
        self._tasks.add(task)
        return task

    def submit(self, operation: str, *args) -> StoreTask:
        task = self.make_task(operation, *args)
        logger.debug(f"Submitting store call {operation}")
        self.thread_pool.start(task)
        return task
