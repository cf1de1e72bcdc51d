import logging
import sys
import json


class JSONFormatter(logging.Formatter):
    def format(self, record):
        log_record = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_record)


def setup_logging(log_format: str = "plain"):
    """Configure the root logger for plain or JSON output on stdout."""
    handler = logging.StreamHandler(sys.stdout)
    if log_format == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(levelname)s:     %(message)s"))
    root = logging.getLogger()
    root.setLevel(logging.INFO)
    # Clear existing handlers if any
    if root.handlers:
        root.handlers = []
    root.addHandler(handler)
