# app/platform/logging.py
import os
import json
import logging
import logging.config
from contextvars import ContextVar
from datetime import datetime, timezone

# ===== Request ID =====
request_id_ctx = ContextVar("request_id", default="-")

class RequestIDFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_ctx.get()
        return True

# ===== JSON Formatter =====
class JsonFormatter(logging.Formatter):
    """
    JSON 라인 출력: 로그 수집기에서 바로 파싱 가능.
    검색 요약 로그(extra=...)와 uvicorn.access 레코드의 필드를 함께 포함.
    """
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc)
                .isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", "-"),
        }

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        # 검색 요약 필드 + uvicorn.access 필드(있으면 포함)
        for k in (
            "query", "sort", "page", "total", "took_ms",
            "client_addr", "request_line", "status_code",
            "http_method", "path", "query_string", "duration_ms",
        ):
            v = getattr(record, k, None)
            if v is not None:
                payload[k] = v

        return json.dumps(payload, ensure_ascii=False)

# ===== Text Formatter (로컬 확인용) =====
TEXT_DEFAULT = "%(asctime)s %(levelname)s [%(name)s] [%(request_id)s] %(message)s"

def setup_logging(
    *,
    log_to_file: bool = False,
    log_dir: str = "/var/log/app",
    as_json: bool = True,
    level: str = "INFO",
) -> None:
    """
    - app 로그: root, uvicorn.error
    - access 로그: uvicorn.access
    - 중복 방지: uvicorn.* 는 propagate=False
    """
    os.environ.setdefault("TZ", "UTC")

    formatters = {
        "json": {"()": JsonFormatter},
        "text_default": {"format": TEXT_DEFAULT},
        "text_access": {"format": "%(asctime)s %(levelname)s [access] [%(request_id)s] %(message)s"},
    }

    handlers = {
        "console_app": {
            "class": "logging.StreamHandler",
            "level": level,
            "formatter": "json" if as_json else "text_default",
            "filters": ["request_id"],
        },
        "console_access": {
            "class": "logging.StreamHandler",
            "level": level,
            "formatter": "json" if as_json else "text_access",
            "filters": ["request_id"],
        },
    }

    if log_to_file:
        os.makedirs(log_dir, exist_ok=True)
        handlers["file_app"] = {
            "class": "logging.handlers.TimedRotatingFileHandler",
            "level": level,
            "formatter": "json" if as_json else "text_default",
            "filename": f"{log_dir}/app.log",
            "when": "midnight",
            "backupCount": 14,
            "encoding": "utf-8",
            "filters": ["request_id"],
        }
        handlers["file_access"] = {
            "class": "logging.handlers.TimedRotatingFileHandler",
            "level": level,
            "formatter": "json" if as_json else "text_access",
            "filename": f"{log_dir}/access.log",
            "when": "midnight",
            "backupCount": 14,
            "encoding": "utf-8",
            "filters": ["request_id"],
        }

    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,

        "filters": {
            "request_id": {"()": RequestIDFilter}
        },

        "formatters": formatters,
        "handlers": handlers,

        "loggers": {
            "": {
                "handlers": ["console_app"] + (["file_app"] if log_to_file else []),
                "level": level,
                "propagate": False,
            },
            "uvicorn.error": {
                "handlers": ["console_app"] + (["file_app"] if log_to_file else []),
                "level": level,
                "propagate": False,
            },
            # 접근 로그는 별도 핸들러 (검색 요청 지표와 분리)
            "uvicorn.access": {
                "handlers": ["console_access"] + (["file_access"] if log_to_file else []),
                "level": level,
                "propagate": False,
            },
        },
    })
