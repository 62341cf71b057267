import sys

import pytest

from plugins.antivirus import tool as antivirus_tool
from plugins.batch_transfer import tool as batch_tool
from plugins.cache_cleaner import tool as cache_tool


class RecordingReporter:
    def __init__(self):
        self.percents = []
        self.lines = []
        self.infos = []
        self.done_messages = []
        self.errors = []

    def progress(self, info):
        self.percents.append(info.percent)

    def output(self, line):
        self.lines.append(line)

    def info(self, message):
        self.infos.append(message)

    def done(self, message="Done"):
        self.done_messages.append(message)

    def error(self, message):
        self.errors.append(message)


def _touch(path, text="x"):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def config_dir(tmp_path):
    folder = tmp_path / "config"
    folder.mkdir()
    return folder


# ------------------------------------------------------------
# Cache cleaner
# ------------------------------------------------------------
def test_clean_chrome_cache(tmp_path, config_dir, monkeypatch):
    monkeypatch.setenv("LOCALAPPDATA", str(tmp_path / "local"))
    cache = tmp_path / "local" / "Google" / "Chrome" / "User Data" / "Default" / "Cache"
    _touch(cache / "data_0")
    _touch(cache / "Cache_Data" / "f_000001")

    reporter = RecordingReporter()
    status = cache_tool.run({"BROWSER": "chrome"}, config_dir=config_dir, reporter=reporter)

    assert status == 0
    assert reporter.errors == []
    assert reporter.percents == [50, 100]
    assert reporter.done_messages == ["Cache cleaned for Chrome!"]
    assert (cache / "Cache_Data").is_dir()
    assert not any(p.is_file() for p in cache.rglob("*"))
    assert (config_dir / "deskmate.log").exists()


def test_missing_cache_folder_is_reported(tmp_path, config_dir, monkeypatch):
    monkeypatch.setenv("LOCALAPPDATA", str(tmp_path / "local"))

    reporter = RecordingReporter()
    status = cache_tool.run({"BROWSER": "Edge"}, config_dir=config_dir, reporter=reporter)

    assert status == 1
    assert len(reporter.errors) == 1
    assert reporter.errors[0].startswith("Cache folder not found:\n")
    assert reporter.done_messages == []


def test_firefox_without_profiles_is_reported(config_dir, monkeypatch):
    monkeypatch.delenv("APPDATA", raising=False)

    reporter = RecordingReporter()
    status = cache_tool.run({"BROWSER": "Firefox"}, config_dir=config_dir, reporter=reporter)

    assert status == 1
    assert reporter.errors == ["Firefox cache folder not found!"]


def test_explicit_cache_path(tmp_path, config_dir):
    cache = tmp_path / "somewhere"
    _touch(cache / "entry")

    reporter = RecordingReporter()
    status = cache_tool.run({"BROWSER": "Edge", "CACHE_PATH": str(cache)}, config_dir=config_dir, reporter=reporter)

    assert status == 0
    assert reporter.percents == [100]
    assert not (cache / "entry").exists()


def test_unknown_browser_is_rejected(config_dir):
    reporter = RecordingReporter()
    assert cache_tool.run({"BROWSER": "Opera"}, config_dir=config_dir, reporter=reporter) == 1
    assert "Unsupported browser" in reporter.errors[0]


# ------------------------------------------------------------
# Antivirus check
# ------------------------------------------------------------
def test_antivirus_requires_elevation(config_dir, monkeypatch):
    monkeypatch.setattr(antivirus_tool, "is_elevated", lambda: False)
    launched = []
    monkeypatch.setattr(antivirus_tool, "run_process", lambda *a, **k: launched.append(a))

    reporter = RecordingReporter()
    status = antivirus_tool.run({"OS_NAME": "Linux"}, config_dir=config_dir, reporter=reporter)

    assert status == 1
    assert reporter.errors == [antivirus_tool.PRIVILEGE_MESSAGE]
    assert launched == []
    assert antivirus_tool.precheck() == antivirus_tool.PRIVILEGE_MESSAGE


def test_antivirus_streams_command_output(config_dir, monkeypatch):
    monkeypatch.setattr(antivirus_tool, "is_elevated", lambda: True)
    script = "print('Scanning...')\nprint('Infected files: 0')"
    monkeypatch.setattr(antivirus_tool, "build_command", lambda os_name: [sys.executable, "-c", script])

    reporter = RecordingReporter()
    status = antivirus_tool.run({"OS_NAME": "Linux"}, config_dir=config_dir, reporter=reporter)

    assert status == 0
    assert reporter.lines == ["Scanning...\n", "Infected files: 0\n"]
    assert reporter.done_messages == ["Antivirus check finished (exit code 0)."]
    assert antivirus_tool.precheck() is None


def test_antivirus_launch_failure_is_one_output_line(tmp_path, config_dir, monkeypatch):
    monkeypatch.setattr(antivirus_tool, "build_command", lambda os_name: [str(tmp_path / "missing-shell")])

    reporter = RecordingReporter()
    status = antivirus_tool.run(
        {"OS_NAME": "Mac", "SKIP_PRIVILEGE_CHECK": True}, config_dir=config_dir, reporter=reporter
    )

    assert status == 1
    assert len(reporter.lines) == 1
    assert reporter.lines[0].startswith("Error running commands: ")


def test_antivirus_timeout(config_dir, monkeypatch):
    script = "import time\nprint('working', flush=True)\ntime.sleep(30)"
    monkeypatch.setattr(antivirus_tool, "build_command", lambda os_name: [sys.executable, "-c", script])

    reporter = RecordingReporter()
    status = antivirus_tool.run(
        {"OS_NAME": "Linux", "SKIP_PRIVILEGE_CHECK": True, "PROCESS_TIMEOUT": 1},
        config_dir=config_dir,
        reporter=reporter,
    )

    assert status == 1
    assert reporter.lines == ["working\n"]
    assert "timed out" in reporter.errors[0]


def test_antivirus_unsupported_os(config_dir):
    reporter = RecordingReporter()
    status = antivirus_tool.run(
        {"OS_NAME": "Solaris", "SKIP_PRIVILEGE_CHECK": True}, config_dir=config_dir, reporter=reporter
    )
    assert status == 1
    assert reporter.errors == ["Unsupported OS"]


# ------------------------------------------------------------
# Batch rename / move
# ------------------------------------------------------------
def _batch_overrides(src, dest, **extra):
    overrides = {
        "INPUT_DIRECTORY": str(src),
        "OUTPUT_DIRECTORY": str(dest),
        "EXTENSIONS": "txt",
        "NAMING_PREFIX": "Doc_",
    }
    overrides.update(extra)
    return overrides


def test_batch_rename_copies_matching_files(tmp_path, config_dir):
    src, dest = tmp_path / "in", tmp_path / "out"
    _touch(src / "a.TXT", "A")
    _touch(src / "b.jpg", "B")
    _touch(src / "c.txt", "C")

    reporter = RecordingReporter()
    status = batch_tool.run(_batch_overrides(src, dest), config_dir=config_dir, reporter=reporter)

    assert status == 0
    assert reporter.percents == [50, 100]
    assert reporter.done_messages == ["Rename operation completed! 2 of 2 file(s) processed."]
    assert sorted(p.name for p in dest.iterdir()) == ["Doc_01.TXT", "Doc_02.txt"]
    assert (src / "c.txt").exists()


def test_batch_move_without_matches(tmp_path, config_dir):
    src, dest = tmp_path / "in", tmp_path / "out"
    _touch(src / "photo.png")

    reporter = RecordingReporter()
    status = batch_tool.run(_batch_overrides(src, dest, ACTION="Move"), config_dir=config_dir, reporter=reporter)

    assert status == 0
    assert reporter.percents == [100]
    assert reporter.infos == ["No matching files found to move."]
    assert reporter.done_messages == ["Move operation completed!"]
    assert (src / "photo.png").exists()


def test_batch_dry_run_touches_nothing(tmp_path, config_dir):
    src, dest = tmp_path / "in", tmp_path / "out"
    _touch(src / "a.txt")
    _touch(src / "b.txt")

    reporter = RecordingReporter()
    status = batch_tool.run(_batch_overrides(src, dest, DRY_RUN=True), config_dir=config_dir, reporter=reporter)

    assert status == 0
    assert len(reporter.lines) == 2
    assert reporter.lines[0].rstrip().endswith("Doc_01.txt")
    assert reporter.done_messages == ["Dry run: 2 file(s) would be processed."]
    assert not dest.exists()


def test_batch_prefix_from_config_file(tmp_path, config_dir):
    (config_dir / "deskmate.json").write_text('{"batch_transfer": {"NAMING_PREFIX": "Img_"}}', encoding="utf-8")
    src, dest = tmp_path / "in", tmp_path / "out"
    _touch(src / "x.txt")

    overrides = _batch_overrides(src, dest)
    del overrides["NAMING_PREFIX"]
    status = batch_tool.run(overrides, config_dir=config_dir, reporter=RecordingReporter())

    assert status == 0
    assert (dest / "Img_01.txt").exists()


@pytest.mark.parametrize(
    "change, expected",
    [
        ({"INPUT_DIRECTORY": ""}, "Please select both an input and an output folder."),
        ({"EXTENSIONS": " , "}, "Please enter at least one file extension."),
        ({"ACTION": "Shred"}, "Unknown transfer action"),
    ],
)
def test_batch_validation_errors(tmp_path, config_dir, change, expected):
    src = tmp_path / "in"
    src.mkdir()
    reporter = RecordingReporter()

    status = batch_tool.run(_batch_overrides(src, tmp_path / "out", **change), config_dir=config_dir, reporter=reporter)

    assert status == 1
    assert expected in reporter.errors[0]


def test_batch_missing_input_folder(tmp_path, config_dir):
    reporter = RecordingReporter()
    status = batch_tool.run(_batch_overrides(tmp_path / "nope", tmp_path / "out"), config_dir=config_dir, reporter=reporter)

    assert status == 1
    assert reporter.errors[0].startswith("Input folder not found:")


def test_confirm_message_lists_the_request(tmp_path):
    message = batch_tool.confirm_message(
        {
            "ACTION": "Move",
            "EXTENSIONS": "txt, JPG",
            "INPUT_DIRECTORY": str(tmp_path / "in"),
            "OUTPUT_DIRECTORY": str(tmp_path / "out"),
            "NAMING_PREFIX": "",
        }
    )

    assert message.startswith("Move files with extensions ['.txt', '.jpg']\nfrom:\n")
    assert f"to:\n{tmp_path / 'out'}\n" in message
    assert message.endswith("Naming pattern: DeskMate_\nProceed?")
