"""Records domain module - platform-style record identifiers"""

from .ids import (
    is_valid_id,
    checksum_suffix,
    to_15,
    to_18,
    id_forms,
    lookup_keys,
    key_prefix,
    new_record_id,
    GROUP_KEY_PREFIX,
    USER_KEY_PREFIX,
    FEED_ITEM_KEY_PREFIX,
    NETWORK_KEY_PREFIX,
)

__all__ = [
    "is_valid_id",
    "checksum_suffix",
    "to_15",
    "to_18",
    "id_forms",
    "lookup_keys",
    "key_prefix",
    "new_record_id",
    "GROUP_KEY_PREFIX",
    "USER_KEY_PREFIX",
    "FEED_ITEM_KEY_PREFIX",
    "NETWORK_KEY_PREFIX",
]
