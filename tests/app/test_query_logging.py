# tests/app/test_query_logging.py
import json
import logging

from trailmap.domain.ways import WayIndex
from trailmap.engine.search import RouteSearch
from trailmap.io.query_logging import QueryLogging, _default_json_logger


class _ListHandler(logging.Handler):
    def __init__(self):
        super().__init__(level=logging.DEBUG)
        self.records: list[logging.LogRecord] = []

    def emit(self, record):
        self.records.append(record)


def _logger(name: str) -> tuple[logging.Logger, _ListHandler]:
    log = logging.getLogger(name)
    log.setLevel(logging.DEBUG)
    log.propagate = False
    h = _ListHandler()
    log.handlers = [h]
    return log, h


def test_query_end_is_logged_with_result():
    log, h = _logger("trailmap.test.query")
    hooks = QueryLogging(run_id="r1", logger=log)
    idx = WayIndex(hooks=hooks)
    idx.add_way("W1", [(0, 0), (0, 3)])
    RouteSearch(idx, hooks=hooks).route_any((0, 0), (0, 3))

    ends = [r for r in h.records if r.getMessage() == "query_end"]
    assert len(ends) == 1
    assert ends[0].extra["kind"] == "route_any"
    assert ends[0].extra["found"] is True
    assert ends[0].extra["hops"] == 1
    assert ends[0].extra["run_id"] == "r1"
    # not in debug mode: no starts, no accepted mutations
    assert not [r for r in h.records if r.getMessage() in ("query_start", "mutation")]


def test_debug_mode_samples_mutations():
    log, h = _logger("trailmap.test.debug")
    hooks = QueryLogging(logger=log, debug=True, sample_every=2)
    idx = WayIndex(hooks=hooks)
    for i in range(4):
        idx.add_way(f"W{i}", [(i, 0), (i + 1, 0)])
    assert len([r for r in h.records if r.getMessage() == "mutation"]) == 2
    RouteSearch(idx, hooks=hooks).route_with_cycle((0, 0))
    assert [r.extra["kind"] for r in h.records if r.getMessage() == "query_start"] == [
        "route_with_cycle"
    ]


def test_rejected_mutation_is_reported():
    log, h = _logger("trailmap.test.reject")
    idx = WayIndex(hooks=QueryLogging(logger=log))
    idx.add_way("W1", [(0, 0), (0, 3)])
    idx.add_way("W1", [(0, 0), (0, 3)])
    idx.remove_way("nope")
    rejected = [r.extra["op"] for r in h.records if r.getMessage() == "mutation_rejected"]
    assert rejected == ["add_way", "remove_way"]


def test_json_formatter_emits_payload(capsys):
    log = _default_json_logger(name="trailmap.test.json", level="INFO")
    QueryLogging(run_id="json", logger=log).query_end("route_any", found=False, hops=0, ms=1.23456)
    line = capsys.readouterr().out.strip().splitlines()[-1]
    payload = json.loads(line)
    assert payload["msg"] == "query_end"
    assert payload["run_id"] == "json"
    assert payload["ms"] == 1.235
