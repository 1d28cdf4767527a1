DIGITS = str.maketrans("", "", "0123456789")
DELIMITER = ":"


def normalize(key_name, type_tag):
    """Group identity of a key: its name without ASCII digits, plus ``:type``."""
    return key_name.translate(DIGITS) + DELIMITER + type_tag


def split_shape(shape):
    """Inverse of :func:`normalize` for display: ``(pattern, type)``."""
    pattern, _, type_tag = shape.rpartition(DELIMITER)
    return pattern, type_tag
