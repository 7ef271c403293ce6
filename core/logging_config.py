from pathlib import Path
import logging
import sys
from typing import Optional
from datetime import datetime


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def setup_logging(
    logs_dir: Optional[str | Path] = None,
    log_file_name: str = "server.log",
    level: int = logging.INFO,
    stream=None,
) -> logging.Logger:
    """Configure root logging to a stream and a timestamped file under `logs_dir`.

    Idempotent: calling multiple times won't add duplicate handlers.
    The stream defaults to stderr because stdout carries the MCP stdio transport.
    Returns a module-level logger for callers to use.
    """
    if logs_dir is None:
        logs_dir = Path(__file__).resolve().parent.parent / "logs"
    else:
        logs_dir = Path(logs_dir)
        if not logs_dir.is_absolute():
            logs_dir = Path(__file__).resolve().parent.parent / logs_dir
    stream = stream or sys.stderr

    try:
        logs_dir.mkdir(parents=True, exist_ok=True)
    except OSError:
        # continue with the stream handler only
        pass

    # each run writes to its own file
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    base = Path(log_file_name).stem
    ext = Path(log_file_name).suffix or ".log"
    log_file = logs_dir / f"{base}_{timestamp}{ext}"

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT)

    file_handler_exists = any(
        isinstance(h, logging.FileHandler) and Path(h.baseFilename).parent == logs_dir.resolve()
        for h in root_logger.handlers
    )
    if not file_handler_exists:
        try:
            fh = logging.FileHandler(log_file, encoding="utf-8")
            fh.setFormatter(formatter)
            fh.setLevel(level)
            root_logger.addHandler(fh)
        except OSError:
            # permissions etc: stream only
            pass

    stream_exists = any(
        type(h) is logging.StreamHandler and getattr(h, "stream", None) is stream
        for h in root_logger.handlers
    )
    if not stream_exists:
        sh = logging.StreamHandler(stream)
        sh.setFormatter(formatter)
        sh.setLevel(level)
        root_logger.addHandler(sh)

    return logging.getLogger(__name__)
