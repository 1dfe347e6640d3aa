"""
Tests for the tracker's event handling and views
"""

from study_tracker.main import StudyTracker
from study_tracker.models.events import ActionType, TrackerEvent
from study_tracker.services.focus_timer import TimerStatus


def event(action, **kwargs):
    return TrackerEvent(action=action, **kwargs)


def test_create_and_toggle_events(tracker):
    """Test creating and completing a task through events"""
    created = tracker.handle_event(event(ActionType.CREATE_TASK, text="Lab report", priority="high"))
    assert created.success
    task_id = created.data.id
    
    toggled = tracker.handle_event(event(ActionType.TOGGLE_TASK, task_id=task_id))
    
    assert toggled.success
    assert toggled.data.completed is True
    assert tracker.summary().percent == 100
    assert tracker.summary().celebrate is True


def test_blank_task_is_transient_warning(tracker):
    result = tracker.handle_event(event(ActionType.CREATE_TASK, text="   "))
    
    assert result.success is False
    assert result.transient is True
    assert result.message == "Please enter a task!"
    assert len(tracker.task_store) == 0


def test_events_on_missing_task_are_harmless(tracker):
    assert tracker.handle_event(event(ActionType.TOGGLE_TASK, task_id=1)).success
    assert tracker.handle_event(event(ActionType.DELETE_TASK, task_id=1)).success
    assert not tracker.handle_event(event(ActionType.DELETE_TASK)).success


def test_filter_and_search_state(tracker):
    """Test view state follows filter and search events"""
    tracker.handle_event(event(ActionType.CREATE_TASK, text="Algebra", category="math"))
    done = tracker.handle_event(event(ActionType.CREATE_TASK, text="Essay")).data
    tracker.handle_event(event(ActionType.TOGGLE_TASK, task_id=done.id))
    
    result = tracker.handle_event(event(ActionType.SET_FILTER, filter="completed"))
    assert [t.text for t in result.data] == ["Essay"]
    
    tracker.handle_event(event(ActionType.SET_FILTER, filter="all"))
    result = tracker.handle_event(event(ActionType.SET_SEARCH, search="MATH"))
    assert [t.text for t in result.data] == ["Algebra"]
    
    tracker.handle_event(event(ActionType.SET_SEARCH, search="zzz"))
    view = tracker.view()
    assert view.tasks == []
    assert view.empty_message == "No tasks match your criteria."


def test_unknown_filter_event(tracker):
    result = tracker.handle_event(event(ActionType.SET_FILTER, filter="later"))
    
    assert not result.success
    assert tracker.current_filter.value == "all"


def test_manual_order_survives_filter_switch(tracker):
    """Test a drag order comes back after viewing a sorted filter"""
    low = tracker.handle_event(event(ActionType.CREATE_TASK, text="Low", priority="low")).data
    high = tracker.handle_event(event(ActionType.CREATE_TASK, text="High", priority="high")).data
    
    assert [t.text for t in tracker.visible_tasks()] == ["High", "Low"]
    
    tracker.handle_event(event(ActionType.REORDER_TASKS, ids=[low.id, high.id]))
    assert [t.text for t in tracker.visible_tasks()] == ["Low", "High"]
    
    tracker.handle_event(event(ActionType.SET_FILTER, filter="active"))
    assert [t.text for t in tracker.visible_tasks()] == ["High", "Low"]
    
    tracker.handle_event(event(ActionType.SET_FILTER, filter="all"))
    assert [t.text for t in tracker.visible_tasks()] == ["Low", "High"]


def test_timer_events_record_session(tracker, scheduler):
    task = tracker.handle_event(event(ActionType.CREATE_TASK, text="Study")).data
    
    started = tracker.handle_event(event(ActionType.TIMER_START))
    assert started.data.status == TimerStatus.RUNNING
    
    while scheduler.fire():
        pass
    
    sessions = tracker.session_store.todays_sessions()
    assert len(sessions) == 1
    assert sessions[0].linked_task == task.id
    assert tracker.view().summary.focus_minutes_today == 25


def test_settings_events(tracker):
    assert tracker.handle_event(event(ActionType.TOGGLE_THEME)).data.theme.value == "dark"
    assert tracker.handle_event(event(ActionType.SET_THEME, theme="light")).data.theme.value == "light"
    
    result = tracker.handle_event(event(ActionType.SET_FOCUS_DURATION, focus_duration=45))
    assert result.success
    assert tracker.timer.remaining_seconds == 45 * 60
    
    assert not tracker.handle_event(event(ActionType.SET_FOCUS_DURATION, focus_duration=0)).success
    assert not tracker.handle_event(event(ActionType.SET_FOCUS_DURATION)).success


def test_subscribers_hear_changes(tracker):
    changes = []
    tracker.subscribe(changes.append)
    
    tracker.handle_event(event(ActionType.CREATE_TASK, text="A"))
    tracker.handle_event(event(ActionType.TOGGLE_THEME))
    tracker.session_store.record_completion(25)
    
    assert changes == ["tasks", "settings", "sessions"]


def test_clear_data(tracker, storage):
    tracker.handle_event(event(ActionType.CREATE_TASK, text="A"))
    tracker.session_store.record_completion(25)
    tracker.handle_event(event(ActionType.SET_THEME, theme="dark"))
    
    tracker.handle_event(event(ActionType.CLEAR_DATA))
    
    assert tracker.task_store.tasks == []
    assert tracker.session_store.sessions == []
    assert tracker.settings_store.theme.value == "dark"
    assert storage.load("tasks") is None
    assert storage.load("sessions") is None
    assert storage.load("settings")["theme"] == "dark"


def test_state_reloads_from_storage(tracker, storage, clock):
    """Test a new tracker on the same storage sees the same data"""
    tracker.handle_event(event(ActionType.CREATE_TASK, text="A", dueDate="2026-10-25"))
    tracker.session_store.record_completion(25)
    
    reloaded = StudyTracker(storage=storage, clock=clock)
    
    assert reloaded.task_store.tasks == tracker.task_store.tasks
    assert reloaded.session_store.sessions == tracker.session_store.sessions
    assert reloaded.settings_store.settings == tracker.settings_store.settings


def test_export_report(tracker):
    tracker.handle_event(event(ActionType.CREATE_TASK, text="History essay"))
    
    report = tracker.export_report()
    
    assert "History essay" in report
    assert "Total Tasks: 1" in report


def test_summary_focus_minutes_come_from_session_store(tracker):
    tracker.session_store.record_completion(25)
    tracker.session_store.record_completion(50)
    
    assert tracker.summary().focus_minutes_today == tracker.session_store.todays_focus_minutes() == 75
