"""redis-py backed store client used by the sampler."""

import logging

import redis

from .errors import EmptyKeyspaceError, StoreConnectionError

logger = logging.getLogger(__name__)

TTL_NO_EXPIRY = -1
TTL_MISSING = -2
TYPE_MISSING = "none"
NO_SUCH_KEY = "no such key"


class RedisStore:
    """Adapter exposing the three calls the sampler needs."""

    def __init__(self, client):
        self.client = client

    def dbsize(self):
        return self.client.dbsize()

    def random_key(self):
        key = self.client.randomkey()
        if key is None:
            raise EmptyKeyspaceError()
        return key

    def describe(self, key):
        """TYPE, TTL and raw DEBUG OBJECT for ``key`` in one round trip."""
        pipe = self.client.pipeline(transaction=False)
        pipe.type(key)
        pipe.ttl(key)
        # "DEBUG", "OBJECT" as separate args skips redis-py's reply parser
        pipe.execute_command("DEBUG", "OBJECT", key)
        key_type, ttl, payload = pipe.execute(raise_on_error=False)

        for reply in (key_type, ttl):
            if isinstance(reply, Exception):
                raise reply
        if isinstance(payload, Exception):
            # the key can expire between TTL and DEBUG OBJECT
            if NO_SUCH_KEY not in str(payload).lower():
                raise payload
            payload = None
        return key_type, ttl, payload


# ------------------------------------------------------------
# Connection
# ------------------------------------------------------------
def connect(settings):
    host, port, db = settings.host, settings.port, settings.db
    client = redis.Redis(
        host=host,
        port=port,
        db=db,
        password=settings.password,
        socket_timeout=settings.socket_timeout,
        socket_connect_timeout=settings.socket_timeout,
        decode_responses=True,
        # key names are arbitrary bytes; keep them round-trippable
        encoding_errors="surrogateescape",
    )
    try:
        client.ping()
    except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as e:
        raise StoreConnectionError(f"cannot reach Redis at {host}:{port}: {e}") from e
    logger.debug("connected to %s:%s db=%s", host, port, db)
    return RedisStore(client)
