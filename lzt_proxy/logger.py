import contextvars
import logging
import sys
import time
import uuid
from typing import Optional, Union

from pythonjsonlogger import jsonlogger

from .config import settings

request_id_ctx: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar("request_id", default=None)


def new_request_id() -> str:
    return uuid.uuid4().hex[:12]


def get_request_id() -> str:
    rid = request_id_ctx.get()
    if rid:
        return rid
    rid = new_request_id()
    request_id_ctx.set(rid)
    return rid


class JsonFormatter(jsonlogger.JsonFormatter):
    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)
        log_record.setdefault("level", record.levelname)
        log_record.setdefault("ts", int(time.time() * 1000))
        log_record.setdefault("logger", record.name)
        log_record.setdefault("rid", get_request_id())
        log_record.setdefault("service", settings.service_name)
        log_record.setdefault("env", settings.deploy_env)


def setup_logger(name: str = "lzt_proxy", level: Union[str, int, None] = None) -> logging.Logger:
    logger = logging.getLogger(name)
    logger.setLevel(level or settings.log_level)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JsonFormatter("%(message)s"))
        logger.addHandler(handler)
    return logger
