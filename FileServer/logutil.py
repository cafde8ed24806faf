# FileServer/logutil.py
from __future__ import annotations
import json, logging, os, time
from logging.handlers import RotatingFileHandler
from contextlib import contextmanager

_STD_KEYS = {
    "name","msg","args","levelname","levelno","pathname","filename","module",
    "exc_info","exc_text","stack_info","lineno","funcName","created","msecs",
    "relativeCreated","thread","threadName","processName","process","asctime",
    "taskName",
}

def _extras(record: logging.LogRecord):
    for k, v in record.__dict__.items():
        if k in _STD_KEYS or k.startswith("_"):
            continue
        yield k, v

class JSONLFormatter(logging.Formatter):
    """One compact JSON object per line; `extra=` fields are merged in."""
    def format(self, record: logging.LogRecord) -> str:
        base = {
            "ts": int(record.created * 1000),
            "lvl": record.levelname,
            "name": record.name,
            "msg": record.getMessage(),
        }
        for k, v in _extras(record):
            try:
                json.dumps(v)
                base[k] = v
            except (TypeError, ValueError):
                base[k] = repr(v)
        if record.exc_info:
            base["exc"] = self.formatException(record.exc_info)
        return json.dumps(base, separators=(",", ":"), default=str)

class RichFormatter(logging.Formatter):
    """Console line: 'HH:MM:SS LEVEL [name] msg k=v ...'."""
    def format(self, record: logging.LogRecord) -> str:
        ts = time.strftime("%H:%M:%S", time.localtime(record.created))
        extras = " ".join(f"{k}={safe_preview(v, limit=160)}" for k, v in _extras(record))
        line = f"{ts} {record.levelname.ljust(5)} [{record.name}] {record.getMessage()}"
        if extras:
            line += " " + extras
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line

def get_logger(name: str,
               file_basename: str = "server",
               *,
               level: str | None = None,
               log_dir: str | None = None) -> logging.Logger:
    """
    Logger with a readable console handler and a rotating JSONL file.

    Env: LOG_LEVEL, LOG_LEVEL_CONSOLE, LOG_LEVEL_FILE, LOG_DIR,
         LOG_MAX_BYTES, LOG_BACKUP_COUNT
    """
    logger = logging.getLogger(name)
    if getattr(logger, "_logutil_configured", False):
        return logger

    logger.setLevel(level or os.getenv("LOG_LEVEL", "DEBUG"))

    ch = logging.StreamHandler()
    ch.setLevel(os.getenv("LOG_LEVEL_CONSOLE", "INFO"))
    ch.setFormatter(RichFormatter())
    logger.addHandler(ch)

    log_dir = log_dir or os.getenv("LOG_DIR", "logs")
    try:
        os.makedirs(log_dir, exist_ok=True)
        fh = RotatingFileHandler(os.path.join(log_dir, f"{file_basename}.log"),
                                 maxBytes=int(os.getenv("LOG_MAX_BYTES", "10485760")),
                                 backupCount=int(os.getenv("LOG_BACKUP_COUNT", "5")),
                                 encoding="utf-8")
        fh.setLevel(os.getenv("LOG_LEVEL_FILE", "DEBUG"))
        fh.setFormatter(JSONLFormatter())
        logger.addHandler(fh)
    except OSError as e:
        logger.warning("file logging disabled: %s", e)

    logger.propagate = False
    logger._logutil_configured = True  # type: ignore[attr-defined]
    return logger

class ContextAdapter(logging.LoggerAdapter):
    """Binds persistent context (user, path) onto every record."""
    def process(self, msg, kwargs):
        extra = kwargs.get("extra", {})
        extra.update(self.extra)
        kwargs["extra"] = extra
        return msg, kwargs

def bind(logger: logging.Logger, **ctx) -> ContextAdapter:
    return ContextAdapter(logger, ctx)

def safe_preview(val, *, limit: int = 256) -> str:
    s = str(val)
    return s if len(s) <= limit else (s[:limit] + "…")

def redacts(s: str | None, show: int = 4) -> str:
    if not s:
        return ""
    if len(s) <= show:
        return "*" * len(s)
    return s[:show] + "…" + "*" * max(0, len(s) - show - 1)

@contextmanager
def span(logger: logging.Logger | ContextAdapter, event: str, **fields):
    """Log <event>.ok with dur_ms, or <event>.fail with the exception, around a block."""
    t0 = time.perf_counter()
    try:
        yield
    except Exception as e:
        dur_ms = int((time.perf_counter() - t0) * 1000)
        logger.warning(f"{event}.fail", extra={**fields, "dur_ms": dur_ms, "err": safe_preview(e)})
        raise
    dur_ms = int((time.perf_counter() - t0) * 1000)
    logger.info(f"{event}.ok", extra={**fields, "dur_ms": dur_ms})
