#!/usr/bin/env python3
"""
Redis Audit
Samples random keys from one Redis db and reports per key-shape statistics
"""

import logging
import sys

import redis

from .config import USAGE, load_settings
from .errors import AuditError, UsageError
from .report import render
from .sampler import run_audit
from .store import connect


def print_progress(done, total):
    print(f"Sampled {done}/{total} keys...", end="\r", file=sys.stderr, flush=True)


def main(argv=None):
    args = sys.argv[1:] if argv is None else argv

    # ------------------------------------------------------------
    # Arguments: <host> <port> <dbnum> <sample_size>
    # ------------------------------------------------------------
    try:
        settings = load_settings(args)
    except UsageError as e:
        if str(e) != USAGE:
            print(e)
        print(USAGE)
        return 1

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    print(
        f"Auditing {settings.host}:{settings.port} db:{settings.db} "
        f"sampling {settings.sample_size} keys"
    )

    # ------------------------------------------------------------
    # Sampling
    # ------------------------------------------------------------
    try:
        store = connect(settings)
        result = run_audit(
            store,
            settings.sample_size,
            progress=print_progress,
            progress_every=settings.progress_every,
        )
    except AuditError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    except redis.exceptions.RedisError as e:
        print(f"error: redis: {e}", file=sys.stderr)
        return 1

    if settings.progress_every and settings.sample_size >= settings.progress_every:
        print(file=sys.stderr)

    # ------------------------------------------------------------
    # Report
    # ------------------------------------------------------------
    print()
    print(render(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())
