import hashlib
import re


#: Matches a trailing segment that looks like a hash suffix
HASH_SUFFIX_REGEX = re.compile(r"(^|-)[0-9a-f]{8}$")


def sanitise(value):
    """
    Returns a sanitised form of the given value suitable for metric names.
    """
    return re.sub(r"[^a-z0-9]+", "-", str(value).lower()).strip("-")


def metric_name(kind, identifier):
    """
    Returns the metric name for the given adapter kind and identifier.

    If sanitising the identifier changes it, a short hash of the raw identifier is
    appended so that distinct identifiers never produce the same name. The hash is
    also appended to clean identifiers that already end in something that looks
    like a hash, so that a hashed name can never be mimicked by a clean one.
    """
    sanitised = sanitise(identifier)
    if sanitised != identifier or HASH_SUFFIX_REGEX.search(sanitised):
        digest = hashlib.sha256(str(identifier).encode()).hexdigest()[:8]
        sanitised = f"{sanitised}-{digest}" if sanitised else digest
    return f"{sanitise(kind)}-{sanitised}"
