"""
HTTP interface for the tracker
"""

from typing import Optional
from fastapi import FastAPI, Depends, HTTPException, Query
from fastapi.responses import PlainTextResponse
from study_tracker.config.settings import settings
from study_tracker.main import StudyTracker
from study_tracker.models.events import ActionType, TrackerEvent
from study_tracker.models.response import ActionResult
from study_tracker.models.task import TaskCreate, ReorderRequest
from study_tracker.models.user_settings import SettingsUpdate
from study_tracker.services.statistics import calendar_month
from study_tracker.services.task_query import filter_and_sort
from study_tracker.utils.error_handler import TrackerError, ValidationError, NotFoundError, format_error_message
from study_tracker.utils.formatters import report_filename
from study_tracker.utils.logger import logger

app = FastAPI(title="Study Tracker")

_tracker: Optional[StudyTracker] = None


async def get_tracker() -> StudyTracker:
    """Shared tracker instance, created on first use in the event loop"""
    global _tracker
    if _tracker is None:
        logger.info("[Web] Initializing tracker...")
        _tracker = StudyTracker()
    return _tracker


def _http_error(error: TrackerError) -> HTTPException:
    message = format_error_message(error)
    if isinstance(error, ValidationError):
        return HTTPException(status_code=422, detail=message)
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=404, detail=message)
    return HTTPException(status_code=500, detail=message)


@app.get("/api/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "ok"}


@app.get("/api/tasks")
async def list_tasks(
    filter: str = "all",
    search: str = "",
    manual: bool = False,
    tracker: StudyTracker = Depends(get_tracker),
):
    """Filtered and sorted task list"""
    try:
        tasks = filter_and_sort(
            tracker.task_store.tasks, filter, search, now=tracker.clock(), manual_order=manual
        )
    except TrackerError as e:
        raise _http_error(e) from e
    return ActionResult(message=f"{len(tasks)} tasks", data=tasks)


@app.post("/api/tasks", status_code=201)
async def create_task(payload: TaskCreate, tracker: StudyTracker = Depends(get_tracker)):
    """Create a task"""
    try:
        task = tracker.task_store.create(
            payload.text,
            due_date=payload.due_date,
            category=payload.category,
            priority=payload.priority,
        )
    except TrackerError as e:
        raise _http_error(e) from e
    return ActionResult(message=f"Task '{task.text}' added", data=task)


@app.get("/api/tasks/{task_id}")
async def get_task(task_id: int, tracker: StudyTracker = Depends(get_tracker)):
    try:
        task = tracker.task_store.get(task_id)
    except TrackerError as e:
        raise _http_error(e) from e
    return ActionResult(message=task.text, data=task)


@app.post("/api/tasks/reorder")
async def reorder_tasks(payload: ReorderRequest, tracker: StudyTracker = Depends(get_tracker)):
    """Apply a manual drag order and show it in the view"""
    return tracker.handle_event(TrackerEvent(action=ActionType.REORDER_TASKS, ids=payload.ids))


@app.post("/api/tasks/{task_id}/toggle")
async def toggle_task(task_id: int, tracker: StudyTracker = Depends(get_tracker)):
    """Flip completion; toggling an absent task changes nothing"""
    return tracker.handle_event(TrackerEvent(action=ActionType.TOGGLE_TASK, task_id=task_id))


@app.delete("/api/tasks/{task_id}")
async def delete_task(task_id: int, tracker: StudyTracker = Depends(get_tracker)):
    """Delete a task; deleting twice is not an error"""
    removed = tracker.task_store.delete(task_id)
    return ActionResult(message="Task deleted" if removed else "Nothing to delete", data={"removed": removed})


@app.get("/api/sessions/today")
async def todays_sessions(
    limit: Optional[int] = Query(None, ge=1),
    tracker: StudyTracker = Depends(get_tracker),
):
    store = tracker.session_store
    sessions = store.recent_sessions(limit) if limit else store.todays_sessions()
    return ActionResult(message=f"{len(sessions)} sessions today", data=sessions)


@app.get("/api/stats")
async def stats(tracker: StudyTracker = Depends(get_tracker)):
    summary = tracker.summary()
    return ActionResult(message=summary.message, data=summary)


@app.get("/api/calendar/{year}/{month}")
async def calendar(year: int, month: int, tracker: StudyTracker = Depends(get_tracker)):
    if not 1 <= month <= 12:
        raise HTTPException(status_code=422, detail="Month must be between 1 and 12")
    days = calendar_month(tracker.task_store.tasks, year, month)
    return ActionResult(message=f"{year}-{month:02d}", data=days)


@app.get("/api/settings")
async def get_settings(tracker: StudyTracker = Depends(get_tracker)):
    return ActionResult(message="Settings", data=tracker.settings_store.settings)


@app.put("/api/settings")
async def update_settings(payload: SettingsUpdate, tracker: StudyTracker = Depends(get_tracker)):
    try:
        if payload.theme is not None:
            tracker.settings_store.set_theme(payload.theme)
        if payload.focus_duration is not None:
            tracker.settings_store.set_focus_duration(payload.focus_duration)
    except TrackerError as e:
        raise _http_error(e) from e
    return ActionResult(message="Settings saved", data=tracker.settings_store.settings)


@app.get("/api/timer")
async def timer_state(tracker: StudyTracker = Depends(get_tracker)):
    return ActionResult(message="Timer", data=tracker.timer.snapshot())


@app.post("/api/timer/{command}")
async def timer_command(command: str, tracker: StudyTracker = Depends(get_tracker)):
    """Start, pause or reset the focus timer"""
    actions = {
        "start": tracker.timer.start,
        "pause": tracker.timer.pause,
        "reset": tracker.timer.reset,
    }
    if command not in actions:
        raise HTTPException(status_code=404, detail=f"Unknown timer command '{command}'")
    return ActionResult(message=f"Timer {command}", data=actions[command]())


@app.post("/api/events")
async def process_event(event: TrackerEvent, tracker: StudyTracker = Depends(get_tracker)):
    """Handle a generic UI event"""
    return tracker.handle_event(event)


@app.get("/api/view")
async def view(tracker: StudyTracker = Depends(get_tracker)):
    return tracker.view()


@app.get("/api/export", response_class=PlainTextResponse)
async def export(tracker: StudyTracker = Depends(get_tracker)):
    """Plain-text report download"""
    filename = report_filename(tracker.clock())
    return PlainTextResponse(
        tracker.export_report(),
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="127.0.0.1", port=settings.WEB_PORT)
