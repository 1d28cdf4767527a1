import logging
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict

from .errors import MalformedMetadataError, VanishedKeyError
from .metadata import parse_debug_payload
from .shapes import normalize
from .stats import KeyObservation, SampledKeyStats
from .store import TTL_MISSING, TTL_NO_EXPIRY, TYPE_MISSING

logger = logging.getLogger(__name__)


@dataclass
class AuditResult:
    """Shape -> SampledKeyStats for one run, plus how the run went."""

    db_size: int
    requested: int
    groups: Dict[str, SampledKeyStats] = field(default_factory=lambda: defaultdict(SampledKeyStats))
    malformed: int = 0
    vanished: int = 0
    interrupted: bool = False

    @property
    def folded(self):
        return sum(stats.total_instances for stats in self.groups.values())

    @property
    def total_sampled_bytes(self):
        return sum(stats.total_serialized_length for stats in self.groups.values())


def observe(store, key):
    """Query one key and build its observation, or raise a per-sample error."""
    key_type, ttl, payload = store.describe(key)
    if key_type == TYPE_MISSING or ttl == TTL_MISSING or payload is None:
        raise VanishedKeyError(key)

    serialized_length, idle_seconds = parse_debug_payload(payload)
    return KeyObservation(
        key=key,
        type=key_type,
        idle_seconds=idle_seconds,
        serialized_length=serialized_length,
        ttl=None if ttl == TTL_NO_EXPIRY else ttl,
    )


def run_audit(store, sample_size, progress=None, progress_every=1000):
    """
    Sample ``sample_size`` random keys from ``store`` and fold them per shape.

    ``store`` needs ``dbsize()``, ``random_key()`` and ``describe(key)``.
    EmptyKeyspaceError and Redis errors abort the run; malformed and vanished
    keys are skipped. Ctrl-C returns the partial result marked interrupted.
    """
    result = AuditResult(db_size=store.dbsize(), requested=sample_size)

    try:
        for i in range(1, sample_size + 1):
            key = store.random_key()
            try:
                obs = observe(store, key)
            except VanishedKeyError as e:
                result.vanished += 1
                logger.debug("%s", e)
            except MalformedMetadataError as e:
                result.malformed += 1
                logger.warning("skipping key %r: %s", key, e)
            else:
                result.groups[normalize(obs.key, obs.type)].fold(obs)

            if progress is not None and progress_every and i % progress_every == 0:
                progress(i, sample_size)
    except KeyboardInterrupt:
        result.interrupted = True
        logger.warning("interrupted after %d folded samples", result.folded)

    result.groups = dict(result.groups)
    return result
