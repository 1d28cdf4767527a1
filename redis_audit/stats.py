from dataclasses import dataclass, field
from typing import List, Optional

MAX_SAMPLE_NAMES = 10


@dataclass(frozen=True)
class KeyObservation:
    """One sampled key. ``ttl`` is None when the key never expires."""

    key: str
    type: str
    idle_seconds: int
    serialized_length: int
    ttl: Optional[int] = None


@dataclass
class SampledKeyStats:
    """Running aggregate for every sampled key of one shape."""

    total_instances: int = 0
    total_idle_seconds: int = 0
    total_serialized_length: int = 0
    total_keys_with_expiry: int = 0
    min_serialized_length: Optional[int] = None
    max_serialized_length: Optional[int] = None
    min_idle_seconds: Optional[int] = None
    max_idle_seconds: Optional[int] = None
    max_ttl: Optional[int] = None
    sample_key_names: List[str] = field(default_factory=list)

    def fold(self, obs):
        self.total_instances += 1
        self.total_idle_seconds += obs.idle_seconds
        self.total_serialized_length += obs.serialized_length

        if obs.ttl is not None:
            self.total_keys_with_expiry += 1
            if self.max_ttl is None or obs.ttl > self.max_ttl:
                self.max_ttl = obs.ttl

        self.min_idle_seconds = _lower(self.min_idle_seconds, obs.idle_seconds)
        self.max_idle_seconds = _upper(self.max_idle_seconds, obs.idle_seconds)
        self.min_serialized_length = _lower(self.min_serialized_length, obs.serialized_length)
        self.max_serialized_length = _upper(self.max_serialized_length, obs.serialized_length)

        if len(self.sample_key_names) < MAX_SAMPLE_NAMES and obs.key not in self.sample_key_names:
            self.sample_key_names.append(obs.key)

    @property
    def average_idle_seconds(self):
        if self.total_instances == 0:
            return None
        return self.total_idle_seconds / self.total_instances

    @property
    def expiry_ratio(self):
        if self.total_instances == 0:
            return None
        return self.total_keys_with_expiry / self.total_instances


def _lower(current, value):
    return value if current is None or value < current else current


def _upper(current, value):
    return value if current is None or value > current else current
