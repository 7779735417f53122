"""Record identifier helpers.

Records are addressed by platform-style ids in two interchangeable forms:

- 15 characters, case-sensitive: 3-char key prefix + 12 base-62 characters
- 18 characters, case-insensitive: the 15-char form plus a 3-char checksum
  encoding which characters of the 15-char form are uppercase

Both forms of the same record must be treated as equal wherever ids are
matched (mirror lookups, deletes, mentions).
"""

import re
import secrets
import string

SUFFIX_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ012345"
BASE62_ALPHABET = string.digits + string.ascii_uppercase + string.ascii_lowercase

GROUP_KEY_PREFIX = "0F9"
USER_KEY_PREFIX = "005"
FEED_ITEM_KEY_PREFIX = "0D5"
NETWORK_KEY_PREFIX = "0DB"

_ID_PATTERN = re.compile(r"^[a-zA-Z0-9]{15}(?:[a-zA-Z0-9]{3})?$")


def is_valid_id(value) -> bool:
    """Check that value is a well-formed 15- or 18-character id.

    For 18-character ids the checksum suffix is verified as well.
    """
    if not isinstance(value, str) or not _ID_PATTERN.match(value):
        return False
    if len(value) == 18:
        return checksum_suffix(value[:15]) == value[15:].upper()
    return True


def checksum_suffix(id15: str) -> str:
    """Compute the 3-character case checksum for a 15-character id."""
    suffix = []
    for chunk_start in range(0, 15, 5):
        flags = 0
        for position, char in enumerate(id15[chunk_start:chunk_start + 5]):
            if "A" <= char <= "Z":
                flags |= 1 << position
        suffix.append(SUFFIX_ALPHABET[flags])
    return "".join(suffix)


def to_18(record_id: str) -> str:
    """Return the 18-character form of an id.

    Raises:
        ValueError: If record_id is not a valid 15/18-character id
    """
    if not is_valid_id(record_id):
        raise ValueError(f"Invalid record id: {record_id!r}")
    id15 = record_id[:15]
    return id15 + checksum_suffix(id15)


def to_15(record_id: str) -> str:
    """Return the 15-character form of an id.

    Raises:
        ValueError: If record_id is not a valid 15/18-character id
    """
    if not is_valid_id(record_id):
        raise ValueError(f"Invalid record id: {record_id!r}")
    return record_id[:15]


def id_forms(record_id: str) -> set[str]:
    """Both the 15- and 18-character forms of an id."""
    return {to_15(record_id), to_18(record_id)}


def lookup_keys(record_ids) -> set[str]:
    """Collect both id forms for every id, skipping malformed values."""
    keys: set[str] = set()
    for record_id in record_ids:
        if is_valid_id(record_id):
            keys |= id_forms(record_id)
    return keys


def key_prefix(record_id: str) -> str:
    """Three-character key prefix identifying the record type."""
    return record_id[:3]


def new_record_id(prefix: str) -> str:
    """Generate a new 18-character id for the given key prefix.

    Layout: prefix (3) + instance marker "00" + 10 random base-62 chars,
    followed by the checksum suffix.
    """
    if len(prefix) != 3:
        raise ValueError(f"Key prefix must be 3 characters, got {prefix!r}")
    body = "".join(secrets.choice(BASE62_ALPHABET) for _ in range(10))
    return to_18(f"{prefix}00{body}")
