"""
Tests for the REPL: parsing, completion, rendering and command dispatch.

Commands are executed against a TodoApp backed by MemoryStorage, with a
Rich console writing to a buffer.
"""

import io

import pytest
from prompt_toolkit.document import Document
from rich.console import Console

from conftest import FakeClock, run
from tally.app import TodoApp
from tally.core.models import Task
from tally.core.storage import MemoryStorage, TaskPersistence
from tally.core.store import TaskStore
from tally.formatting import COMPLETED_TITLE_STYLE, format_title
from tally.repl.completer import create_completer
from tally.repl.display import render_alert, render_screen
from tally.repl.main import execute_command, format_prompt, plain_prompt
from tally.repl.parser import parse_command, parse_row


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=100, force_terminal=False, color_system=None)


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def app(storage, console):
    return TodoApp(
        TaskStore(TaskPersistence(storage), clock=FakeClock()),
        alert=lambda title, message: render_alert(title, message, console),
    )


def output(console) -> str:
    return console.file.getvalue()


def execute(app, console, line: str) -> bool:
    return run(execute_command(app, parse_command(line), console))


# --- parser ---


def test_parse_simple_command():
    result = parse_command("add Buy milk")
    assert result.command == "add"
    assert result.args == ["Buy", "milk"]
    assert result.text == "Buy milk"


def test_parse_quoted_title():
    result = parse_command('add "Buy   milk"')
    assert result.args == ["Buy   milk"]


def test_parse_unbalanced_quote_falls_back():
    result = parse_command("add Call Mom's doctor")
    assert result.command == "add"
    assert result.text == "Call Mom's doctor"


def test_parse_command_is_case_insensitive():
    assert parse_command("PENDING").command == "pending"


def test_parse_empty_input():
    result = parse_command("   ")
    assert result.command == ""
    assert result.args == []


@pytest.mark.parametrize("value,expected", [("1", 1), (" 12 ", 12), ("0", None), ("-1", None), ("x", None)])
def test_parse_row(value, expected):
    assert parse_row(value) == expected


# --- completer ---


def completions(completer, text):
    return [c.text for c in completer.get_completions(Document(text, cursor_position=len(text)), None)]


def test_completes_commands():
    completer = create_completer()
    assert "pending" in completions(completer, "pe")
    assert set(completions(completer, "")) >= {"add", "toggle", "rm", "filter", "exit"}


def test_completes_filter_modes():
    completer = create_completer()
    assert completions(completer, "filter ") == ["all", "pending", "completed"]
    assert completions(completer, "filter c") == ["completed"]


def test_completes_visible_rows(app):
    run(app.add("A"))
    run(app.add("B"))
    completer = create_completer(app)

    assert completions(completer, "rm ") == ["1", "2"]
    assert completions(completer, "done 2") == ["2"]


def test_no_completion_inside_title():
    assert completions(create_completer(), "add Buy mi") == []


# --- prompt ---


def test_prompt_shows_active_filter(app):
    assert plain_prompt(app) == "tally> "
    app.set_filter("completed")
    assert plain_prompt(app) == "tally:[completed]> "
    assert "completed" in format_prompt(app).value


# --- rendering ---


def test_completed_title_is_struck_through():
    assert format_title(Task(1, "A", completed=True)).style == COMPLETED_TITLE_STYLE
    assert format_title(Task(1, "A")).style == ""


def test_render_screen_shows_header_filters_and_rows(app, console):
    run(app.add("Buy milk"))
    render_screen(app, console)

    text = output(console)
    assert "Task Manager" in text
    assert "What needs to be done?" in text
    assert "All (1)" in text and "Pending (1)" in text and "Completed (0)" in text
    assert "Buy milk" in text


def test_render_screen_empty_state(app, console):
    render_screen(app, console)
    assert "No tasks found" in output(console)


def test_title_markup_is_not_interpreted(app, console):
    run(app.add("[red]not markup[/red]"))
    render_screen(app, console)
    assert "[red]not markup[/red]" in output(console)


# --- dispatch ---


def test_add_command(app, console):
    assert execute(app, console, "add Buy milk") is True
    assert [t.title for t in app.store.tasks] == ["Buy milk"]
    assert "Added" in output(console)
    assert app.pending_input == ""


def test_add_without_title_shows_alert(app, console, storage):
    execute(app, console, "add")
    execute(app, console, 'add "   "')

    text = output(console)
    assert text.count("Oops!") == 2
    assert "Task cannot be empty" in text
    assert app.store.tasks == []
    assert storage.write_count == 0


def test_toggle_by_row(app, console):
    run(app.add("A"))
    run(app.add("B"))

    execute(app, console, "done 2")

    assert [t.completed for t in app.store.tasks] == [False, True]
    assert "Completed: B" in output(console)

    execute(app, console, "toggle 2")
    assert app.store.tasks[1].completed is False
    assert "Reopened: B" in output(console)


def test_rows_follow_active_filter(app, console):
    a = run(app.add("A"))
    run(app.add("B"))
    run(app.toggle(a.id))

    execute(app, console, "pending")
    execute(app, console, "rm 1")

    assert [t.title for t in app.store.tasks] == ["A"]


def test_rm_invalid_row(app, console):
    run(app.add("A"))

    execute(app, console, "rm 5")
    execute(app, console, "rm abc")
    execute(app, console, "rm")

    text = output(console)
    assert "No task at row 5" in text
    assert "Invalid row 'abc'" in text
    assert "Row number required" in text
    assert len(app.store.tasks) == 1


def test_save_failure_shows_alert_and_keeps_list(app, console, storage):
    run(app.add("A"))
    storage.fail_writes = True

    execute(app, console, "rm 1")

    text = output(console)
    assert "Failed to save tasks" in text
    assert "Deleted" not in text
    assert [t.title for t in app.store.tasks] == ["A"]


def test_filter_commands(app, console):
    a = run(app.add("A"))
    run(app.toggle(a.id))

    execute(app, console, "pending")
    assert app.filter_mode == "pending"
    assert "No tasks found" in output(console)

    execute(app, console, "filter completed")
    assert app.filter_mode == "completed"

    execute(app, console, "filter bogus")
    assert app.filter_mode == "completed"
    assert "Invalid filter 'bogus'" in output(console)


def test_unknown_command(app, console):
    assert execute(app, console, "frobnicate") is True
    assert "Unknown command" in output(console)


def test_exit_commands(app, console):
    assert execute(app, console, "exit") is False
    assert execute(app, console, "quit") is False
    assert execute(app, console, "") is True


def test_help_command(app, console):
    execute(app, console, "help")
    assert "Available Commands" in output(console)
