"""Plain-text rendering of an AuditResult."""

from .shapes import split_shape

RULE = "=" * 78
NA = "n/a"


def format_ratio(ratio):
    """A 0..1 ratio as a percentage rounded to 2 places, e.g. ``100%`` or ``33.33%``."""
    if ratio is None:
        return NA
    text = f"{round(ratio * 100, 2):.2f}".rstrip("0").rstrip(".")
    return f"{text}%"


def percentage(part, whole):
    return format_ratio(part / whole if whole else None)


def printable(name):
    """Undecodable key bytes come back as surrogates; show them as \\x escapes."""
    return name.encode("utf-8", "surrogateescape").decode("utf-8", "backslashreplace")


def _value(v):
    return NA if v is None else str(v)


def ordered_groups(result):
    """Largest memory first, shape name breaking ties."""
    return sorted(result.groups.items(), key=lambda kv: (-kv[1].total_serialized_length, kv[0]))


def render_group(shape, stats, total_bytes):
    pattern, type_tag = split_shape(shape)
    avg_idle = stats.average_idle_seconds

    return [
        RULE,
        f"Keys of the form {printable(pattern)} with type {type_tag}",
        f"Sampled instances: {stats.total_instances}",
        "For example:",
        ", ".join(printable(name) for name in stats.sample_key_names),
        "",
        f"{format_ratio(stats.expiry_ratio)} of these keys expire "
        f"({stats.total_keys_with_expiry}), with maximum ttl of {_value(stats.max_ttl)}",
        f"These keys use {percentage(stats.total_serialized_length, total_bytes)} of the total "
        f"sampled memory ({stats.total_serialized_length} bytes)",
        f"Serialized length: (Max: {_value(stats.max_serialized_length)} "
        f"Min: {_value(stats.min_serialized_length)})",
        f"Average idle time: {NA if avg_idle is None else round(avg_idle, 2)} seconds - "
        f"(Max: {_value(stats.max_idle_seconds)} Min: {_value(stats.min_idle_seconds)})",
        "",
    ]


def render(result):
    total_bytes = result.total_sampled_bytes
    folded = result.folded

    lines = [
        f"DB has {result.db_size} keys",
        "",
        f"Stats for {folded} sampled keys in {len(result.groups)} groups",
    ]
    if folded != result.requested:
        lines.append(
            f"Only {folded} of {result.requested} requested samples were folded "
            f"({result.malformed} malformed, {result.vanished} vanished)"
        )
    if result.interrupted:
        lines.append("Sampling was interrupted; the statistics below are partial")
    if total_bytes:
        lines.append(f"Total sampled memory: {total_bytes} bytes")
    else:
        lines.append("Total sampled memory: 0 bytes, memory shares are n/a")
    lines.append("")

    for shape, stats in ordered_groups(result):
        lines.extend(render_group(shape, stats, total_bytes))

    return "\n".join(lines)
