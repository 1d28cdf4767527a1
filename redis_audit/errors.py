"""Error kinds raised while auditing a Redis keyspace."""

PAYLOAD_PREVIEW = 120


class AuditError(Exception):
    pass


class UsageError(AuditError):
    """Bad command line or environment settings."""


class StoreConnectionError(AuditError):
    """The Redis server could not be reached."""


class EmptyKeyspaceError(AuditError):
    def __init__(self):
        super().__init__("RANDOMKEY returned nothing: the selected db is empty")


class MalformedMetadataError(AuditError):
    """DEBUG OBJECT payload is missing one of the labelled fields."""

    def __init__(self, field, payload):
        self.field = field
        self.payload = payload
        preview = payload if len(payload) <= PAYLOAD_PREVIEW else payload[:PAYLOAD_PREVIEW] + "..."
        super().__init__(f"cannot extract {field} from debug payload: {preview!r}")


class VanishedKeyError(AuditError):
    """Key expired or was deleted between RANDOMKEY and the metadata query."""

    def __init__(self, key):
        self.key = key
        super().__init__(f"key {key!r} vanished before it could be inspected")
