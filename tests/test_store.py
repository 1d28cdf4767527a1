import pytest
import redis

from redis_audit import store as store_mod
from redis_audit.config import Settings
from redis_audit.errors import EmptyKeyspaceError, StoreConnectionError
from redis_audit.sampler import run_audit
from redis_audit.store import RedisStore, connect


class FakePipeline:
    def __init__(self, replies):
        self.replies = replies
        self.commands = []

    def type(self, key):
        self.commands.append(("TYPE", key))

    def ttl(self, key):
        self.commands.append(("TTL", key))

    def execute_command(self, *args):
        self.commands.append(args)

    def execute(self, raise_on_error=True):
        assert raise_on_error is False
        return list(self.replies)


class FakeClient:
    def __init__(self, replies=(), random=None, size=0):
        self.replies = replies
        self.random = random
        self.size = size
        self.pipelines = []

    def pipeline(self, transaction=True):
        assert transaction is False
        pipe = FakePipeline(self.replies)
        self.pipelines.append(pipe)
        return pipe

    def randomkey(self):
        return self.random

    def dbsize(self):
        return self.size


def test_describe_batches_three_commands():
    payload = "serializedlength:3 lru_seconds_idle:1"
    client = FakeClient(replies=("string", -1, payload))
    assert RedisStore(client).describe("k") == ("string", -1, payload)

    assert len(client.pipelines) == 1
    assert client.pipelines[0].commands == [("TYPE", "k"), ("TTL", "k"), ("DEBUG", "OBJECT", "k")]


def test_describe_missing_key_yields_no_payload():
    client = FakeClient(replies=("none", -2, redis.exceptions.ResponseError("no such key")))
    assert RedisStore(client).describe("k") == ("none", -2, None)


def test_describe_reraises_debug_errors_for_live_keys():
    err = redis.exceptions.ResponseError("ERR DEBUG command not allowed")
    client = FakeClient(replies=("string", -1, err))
    with pytest.raises(redis.exceptions.ResponseError):
        RedisStore(client).describe("k")


def test_random_key_on_empty_db():
    with pytest.raises(EmptyKeyspaceError):
        RedisStore(FakeClient(random=None)).random_key()


def test_random_key_and_dbsize():
    s = RedisStore(FakeClient(random="user:1", size=12))
    assert s.random_key() == "user:1"
    assert s.dbsize() == 12


def test_connect_failure(monkeypatch):
    class Unreachable:
        def __init__(self, **kwargs):
            self.kwargs = kwargs

        def ping(self):
            raise redis.exceptions.ConnectionError("Connection refused")

    monkeypatch.setattr(store_mod.redis, "Redis", Unreachable)
    with pytest.raises(StoreConnectionError, match="localhost:6380"):
        connect(Settings(host="localhost", port=6380, db=0, sample_size=1))


def test_connect_passes_settings(monkeypatch):
    created = {}

    class Reachable:
        def __init__(self, **kwargs):
            created.update(kwargs)

        def ping(self):
            return True

    monkeypatch.setattr(store_mod.redis, "Redis", Reachable)
    s = connect(Settings(host="h", port=1, db=3, sample_size=1, password="pw", socket_timeout=2.5))

    assert isinstance(s, RedisStore)
    assert created["db"] == 3
    assert created["password"] == "pw"
    assert created["socket_timeout"] == 2.5
    assert created["decode_responses"] is True


def test_describe_key_expiring_mid_pipeline_yields_no_payload():
    client = FakeClient(replies=("string", 3, redis.exceptions.ResponseError("no such key")))
    assert RedisStore(client).describe("k") == ("string", 3, None)


def test_key_expiring_mid_pipeline_is_counted_as_vanished():
    client = FakeClient(
        replies=("string", 3, redis.exceptions.ResponseError("no such key")), random="k", size=1
    )
    result = run_audit(RedisStore(client), 1)
    assert result.vanished == 1
    assert result.groups == {}


def test_connect_keeps_undecodable_key_bytes(monkeypatch):
    created = {}

    class Reachable:
        def __init__(self, **kwargs):
            created.update(kwargs)

        def ping(self):
            return True

    monkeypatch.setattr(store_mod.redis, "Redis", Reachable)
    connect(Settings(host="h", port=1, db=0, sample_size=1))
    assert created["encoding_errors"] == "surrogateescape"
    # what redis-py hands back for b"user:\xff\xfe", and sends again as the same bytes
    name = b"user:\xff\xfe".decode("utf-8", created["encoding_errors"])
    assert name.encode("utf-8", created["encoding_errors"]) == b"user:\xff\xfe"
