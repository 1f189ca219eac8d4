import sys
from datetime import datetime

from flask import current_app, has_app_context

DEFAULT_LOG_FILE = "logs.txt"


def _log_path() -> str:
	if has_app_context():
		return current_app.config.get("LOG_FILE") or DEFAULT_LOG_FILE
	return DEFAULT_LOG_FILE


def log_event(message) -> None :
	current_date_time = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
	line = "TIME: " + current_date_time + " MESSAGE:" + message + "\n"
	# an unwritable log file must not turn a committed write into an error response
	try:
		with open(_log_path(), "a", encoding="utf-8") as file:
			file.write(line)
	except OSError as e:
		sys.stderr.write(f"log_event failed ({type(e).__name__}: {e}): {line}")
