"""shared/task_runner.py

Runs an external command and streams its output line by line.

- stdout and stderr are merged into one stream
- every line is handed to ``on_line`` as soon as it is read, in order
- the exit code is collected once the stream is closed
- a command that cannot be started produces one diagnostic line instead
  of an exception

There is no timeout unless the caller asks for one; a hung process blocks
the calling (worker) thread until it exits. With a timeout the command runs
in its own process group so the whole tree (shell plus the programs it
started) is killed when time runs out.
"""

from __future__ import annotations

import os
import signal
import subprocess
import threading
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence

LAUNCH_ERROR_LINE = "Error running commands: {reason}\n"


@dataclass
class ProcessResult:
	argv: List[str]
	exit_code: Optional[int] = None
	launched: bool = False
	timed_out: bool = False
	line_count: int = 0

	@property
	def ok(self) -> bool:
		return self.launched and not self.timed_out and self.exit_code == 0


def _build_env(env: Optional[Dict[str, str]]) -> Dict[str, str]:
	merged_env = os.environ.copy()
	if env:
		merged_env.update(env)
	# Line-by-line streaming is pointless if a Python child buffers its output.
	merged_env.setdefault("PYTHONUNBUFFERED", "1")
	return merged_env


def _group_kwargs() -> Dict[str, object]:
	if os.name == "nt":
		return {"creationflags": subprocess.CREATE_NEW_PROCESS_GROUP}
	return {"start_new_session": True}


def _kill_tree(proc: subprocess.Popen) -> None:
	"""Kill ``proc`` and every process it started.

	Grandchildren keep the output pipe open, so killing only the direct
	child would leave the reader blocked until they exit on their own.
	"""
	if os.name == "nt":
		subprocess.run(
			["taskkill", "/T", "/F", "/PID", str(proc.pid)],
			stdout=subprocess.DEVNULL,
			stderr=subprocess.DEVNULL,
			check=False,
		)
	else:
		try:
			os.killpg(proc.pid, signal.SIGKILL)
		except (ProcessLookupError, PermissionError):
			pass
	try:
		proc.kill()
	except OSError:
		pass


def run_process(
	argv: Sequence[str],
	on_line: Optional[Callable[[str], None]] = None,
	*,
	cwd: Optional[str] = None,
	env: Optional[Dict[str, str]] = None,
	timeout: Optional[float] = None,
) -> ProcessResult:
	"""Run ``argv`` to completion, forwarding each output line to ``on_line``.

	Every forwarded line ends with a newline. Undecodable bytes are
	replaced. When ``timeout`` (seconds) elapses the process is killed and
	``timed_out`` is set on the result.

	Launch failures (missing executable, permission denied) are reported
	through ``on_line`` as a single "Error running commands: ..." line and
	``launched`` stays False.
	"""
	result = ProcessResult(argv=list(argv))
	group_kwargs = _group_kwargs() if timeout is not None else {}

	def _deliver(line: str) -> None:
		result.line_count += 1
		if on_line is not None:
			on_line(line)

	try:
		proc = subprocess.Popen(
			result.argv,
			cwd=cwd,
			env=_build_env(env),
			stdin=subprocess.DEVNULL,
			stdout=subprocess.PIPE,
			stderr=subprocess.STDOUT,
			text=True,
			errors="replace",
			bufsize=1,
			**group_kwargs,
		)
	except (OSError, ValueError) as e:
		_deliver(LAUNCH_ERROR_LINE.format(reason=e))
		return result

	result.launched = True

	timer: Optional[threading.Timer] = None
	if timeout is not None:
		def _expire() -> None:
			result.timed_out = True
			_kill_tree(proc)

		timer = threading.Timer(timeout, _expire)
		timer.daemon = True
		timer.start()

	try:
		assert proc.stdout is not None
		with proc.stdout:
			for line in proc.stdout:
				if not line.endswith("\n"):
					line += "\n"
				_deliver(line)
		proc.wait()
	except BaseException:
		# The listener failed; do not leave the child running unattended.
		proc.kill()
		proc.wait()
		raise
	finally:
		if timer is not None:
			timer.cancel()

	result.exit_code = proc.returncode
	return result
