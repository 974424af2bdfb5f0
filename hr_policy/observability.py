"""Structured logging and in-process counters for policy fallbacks.

Nothing in the package raises on a catalog miss, a failing collaborator or an
unknown permission key. Those paths degrade silently for the caller, so each
one is recorded here: a JSON log line on the ``hr_policy`` logger and a counter
keyed by event name and labels.
"""

from __future__ import annotations

import json
import logging
from collections import Counter
from threading import Lock
from typing import Any, Mapping

from hr_policy.config import settings


logger = logging.getLogger("hr_policy")
logger.setLevel(settings.log_level.upper())

_metrics_lock = Lock()
_metrics_counter: Counter[str] = Counter()


def _normalize(value: Any) -> Any:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, Mapping):
        return {str(k): _normalize(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [_normalize(v) for v in value]
    return str(value)


def metric_key(name: str, **labels: Any) -> str:
    if not labels:
        return name
    ordered = ",".join(f"{k}={labels[k]}" for k in sorted(labels))
    return f"{name}|{ordered}"


def incr_metric(name: str, value: int = 1, **labels: Any) -> None:
    key = metric_key(name, **{k: _normalize(v) for k, v in labels.items()})
    with _metrics_lock:
        _metrics_counter[key] += value


def metrics_snapshot() -> dict[str, int]:
    with _metrics_lock:
        return dict(_metrics_counter)


def reset_metrics() -> None:
    with _metrics_lock:
        _metrics_counter.clear()


def log_event(
    event: str,
    *,
    level: int = logging.INFO,
    **fields: Any,
) -> None:
    if not logger.isEnabledFor(level):
        return
    payload = {"event": event}
    for key, value in fields.items():
        payload[key] = _normalize(value)
    logger.log(level, json.dumps(payload, sort_keys=True))


def record_fallback(
    event: str,
    *,
    level: int = logging.WARNING,
    labels: Mapping[str, Any] | None = None,
    **fields: Any,
) -> None:
    """Count ``event`` under ``labels`` and log it with the labels plus ``fields``.

    Labels should stay low-cardinality (family, scope); per-call detail such as
    the key or the error text goes in ``fields``.
    """
    labels = dict(labels or {})
    incr_metric(event, **labels)
    log_event(event, level=level, **{**labels, **fields})
