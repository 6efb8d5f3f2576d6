# io/query_logging.py
import json
import logging
import sys

from trailmap.domain.entities.geography import Coord
from trailmap.engine.hooks import NoopHooks


def _default_json_logger(name="trailmap", level="INFO"):
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(sys.stdout)

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
                return json.dumps(payload, default=str)

        h.setFormatter(_JsonFormatter())
        logger.addHandler(h)
    logger.setLevel(level)
    return logger


def _xy(c: Coord | None):
    return None if c is None else [c.x, c.y]


class QueryLogging(NoopHooks):
    """
    Structured logs for route queries and way index mutations.
    Query results and rejected mutations go out at INFO; query starts and
    accepted mutations only in debug mode, the latter sampled.
    """

    def __init__(
        self,
        run_id: str = "local",
        level: str = "INFO",
        debug: bool = False,
        sample_every: int = 1,
        logger: logging.Logger | None = None,
    ):
        self.run_id, self.debug, self.sample_every = run_id, debug, max(1, sample_every)
        self.log = logger or _default_json_logger(level=level)
        self._mutations = 0

    def _emit(self, level: str, msg: str, **extra):
        payload = {"run_id": self.run_id, **extra}
        self.log.log(getattr(logging, level), msg, extra={"extra": payload})

    def query_start(self, kind: str, *, src: Coord, dst: Coord | None, crossroads: int):
        if self.debug:
            self._emit(
                "DEBUG", "query_start", kind=kind, src=_xy(src), dst=_xy(dst), crossroads=crossroads
            )

    def query_end(self, kind: str, *, found: bool, hops: int, ms: float):
        self._emit("INFO", "query_end", kind=kind, found=found, hops=hops, ms=round(ms, 3))

    def mutation(self, op: str, *, way_id, ok: bool, ways: int):
        self._mutations += 1
        if not ok:
            self._emit("INFO", "mutation_rejected", op=op, way_id=way_id, ways=ways)
        elif self.debug and (self._mutations % self.sample_every) == 0:
            self._emit("DEBUG", "mutation", op=op, way_id=way_id, ways=ways)

    def error(self, kind: str, *, reason: str, **extra):
        self._emit("ERROR", "engine_error", kind=kind, reason=reason, **extra)
