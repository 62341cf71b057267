import io

from rich.console import Console

from deskmate import textui
from shared.worker import ProgressInfo


def _console():
    return Console(file=io.StringIO(), width=100, force_terminal=False, color_system=None)


def test_rich_reporter_renders_events():
    console = _console()
    reporter = textui.RichReporter(title="Cleaning Cache - Edge", console=console)

    reporter.progress(ProgressInfo(percent=40))
    reporter.progress(ProgressInfo(percent=100))
    reporter.output("line one\n")
    reporter.info("No matching files found to move.")
    reporter.done("Cache cleaned for Edge!")

    text = console.file.getvalue()
    assert "line one" in text
    assert "No matching files found to move." in text
    assert "Cache cleaned for Edge!" in text
    assert reporter.progress_bar is None
    assert not reporter.failed


def test_rich_reporter_error_marks_failure():
    console = _console()
    reporter = textui.RichReporter(console=console)
    reporter.error("Cache folder not found:\n/tmp/x")

    assert reporter.failed
    assert "Cache folder not found:" in console.file.getvalue()


def test_run_form_collects_answers_in_order(monkeypatch):
    answers = iter(["Move", "/in", "/out", "txt", "Doc_"])
    asked = []

    def fake_ask(field):
        asked.append(field["id"])
        return next(answers)

    monkeypatch.setattr(textui, "ask_field", fake_ask)

    values = textui.run_form({"fields": [{"id": k} for k in ("ACTION", "IN", "OUT", "EXT", "PREFIX")]})

    assert asked == ["ACTION", "IN", "OUT", "EXT", "PREFIX"]
    assert values == {"ACTION": "Move", "IN": "/in", "OUT": "/out", "EXT": "txt", "PREFIX": "Doc_"}


def test_run_form_stops_when_cancelled(monkeypatch):
    monkeypatch.setattr(textui, "ask_field", lambda field: None)
    assert textui.run_form({"fields": [{"id": "A"}, {"id": "B"}]}) is None


class FakeTool:
    TOOL_INFO = {"id": "fake", "name": "Fake Tool", "description": "", "order": 1}
    form_config = {"title": "Fake", "fields": [{"id": "VALUE", "type": "text"}]}

    def __init__(self, problem=None):
        self.problem = problem
        self.calls = []

    def precheck(self):
        return self.problem

    def confirm_message(self, values):
        return f"Use {values['VALUE']}?"

    def run(self, overrides=None, config_dir=None, reporter=None):
        self.calls.append((overrides, config_dir, reporter))
        reporter.done("finished")
        return 0


def test_run_tool_passes_answers_and_reporter(monkeypatch):
    console = _console()
    tool = FakeTool()
    confirmations = []
    monkeypatch.setattr(textui, "ask_field", lambda field: "42")
    monkeypatch.setattr(textui, "prompt_confirm", lambda message, default=False: confirmations.append(message) or True)

    status = textui.run_tool(tool, config_dir="/cfg", console=console)

    assert status == 0
    assert confirmations == ["Use 42?"]
    overrides, config_dir, reporter = tool.calls[0]
    assert overrides == {"VALUE": "42"}
    assert config_dir == "/cfg"
    assert isinstance(reporter, textui.RichReporter)
    assert "finished" in console.file.getvalue()


def test_run_tool_stops_on_precheck_problem(monkeypatch):
    console = _console()
    tool = FakeTool(problem="Needs root")
    monkeypatch.setattr(textui, "ask_field", lambda field: "never asked")

    assert textui.run_tool(tool, console=console) is None
    assert tool.calls == []
    assert "Needs root" in console.file.getvalue()


def test_run_tool_declined_confirmation(monkeypatch):
    tool = FakeTool()
    monkeypatch.setattr(textui, "ask_field", lambda field: "x")
    monkeypatch.setattr(textui, "prompt_confirm", lambda message, default=False: False)

    assert textui.run_tool(tool, console=_console()) is None
    assert tool.calls == []
