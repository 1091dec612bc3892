# io/validation_logging.py
import json
import logging
import sys

from osm_qa.io.recorder import Recorder
from osm_qa.validate.hooks import NoopHooks


def _default_json_logger(name="osm_qa", level="INFO"):
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(sys.stderr)

        class _JsonFormatter(logging.Formatter):
            def format(self, record: logging.LogRecord) -> str:
                payload = {
                    "level": record.levelname,
                    "msg": record.getMessage(),
                    "logger": record.name,
                }
                extra = getattr(record, "extra", None)
                if isinstance(extra, dict):
                    payload.update(extra)
                return json.dumps(payload)

        h.setFormatter(_JsonFormatter())
        logger.addHandler(h)
        logger.setLevel(level)
    return logger


class ValidationLogging(NoopHooks):
    """
    Structured logs for a validation run; issues themselves go to the recorder.
    """

    def __init__(
        self,
        run_id: str = "local",
        level: str = "INFO",
        debug: bool = False,
        logger: logging.Logger | None = None,
        recorder: Recorder | None = None,
    ):
        self.run_id, self.debug = run_id, debug
        self.recorder = recorder
        self.log = logger or _default_json_logger(level=level)
        self.counts: dict[str, int] = {}

    def _emit(self, level: str, msg: str, **extra):
        self.log.log(getattr(logging, level), msg, extra={"extra": {"run_id": self.run_id, **extra}})

    # run lifecycle

    def run_start(self, *, rules: int, edited: int):
        self.counts = {}
        self._emit("INFO", "run_start", rules=rules, edited=edited)

    def run_end(self, *, issues: int, failed: int, wall_ms: float):
        self._emit("INFO", "run_end", issues=issues, failed=failed, wall_ms=wall_ms, by_kind=self.counts)

    def rule_start(self, rule, *, seq: int):
        if self.debug:
            self._emit("DEBUG", "rule_start", rule=rule.kind, seq=seq)

    def rule_end(self, rule, *, produced: int, ms: float):
        if self.debug:
            self._emit("DEBUG", "rule_done", rule=rule.kind, produced=produced, ms=ms)

    def error(self, rule, *, exc: BaseException, **extra):
        self._emit(
            "ERROR",
            "rule_error",
            rule=getattr(rule, "kind", type(rule).__name__),
            error=repr(exc),
            **extra,
        )

    # ------------- Issue reporting --------------------------

    def issue(self, issue):
        self.counts[issue.kind] = self.counts.get(issue.kind, 0) + 1
        if self.recorder:
            self.recorder.emit(issue)
