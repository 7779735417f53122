"""Network (community) resolution for feed posts.

Group feeds belong to the network of their group. The network_id column is
only present on deployments with communities enabled, so it is looked up
through schema introspection and a dynamic query rather than the ORM model.
"""

import logging
from typing import Optional

from sqlalchemy import column, inspect, select, table
from sqlalchemy.exc import NoSuchTableError
from sqlalchemy.orm import Session

from domain.records import GROUP_KEY_PREFIX, is_valid_id, key_prefix, lookup_keys

logger = logging.getLogger(__name__)

GROUP_TABLE = "collaboration_group"
NETWORK_COLUMN = "network_id"


def group_network_column_available(session: Session) -> bool:
    """Whether the live collaboration_group table has a network_id column."""
    try:
        columns = inspect(session.connection()).get_columns(GROUP_TABLE)
    except NoSuchTableError:
        return False
    return any(col["name"] == NETWORK_COLUMN for col in columns)


def resolve_network_id(
    session: Session,
    subject_id: str,
    default_network_id: Optional[str],
) -> Optional[str]:
    """Network to post a subject's feed item in.

    Group subjects use their group's network when the schema exposes one;
    every other subject (users, groups without the column, unknown groups)
    gets default_network_id. None means the internal org.
    """
    if not is_valid_id(subject_id) or key_prefix(subject_id) != GROUP_KEY_PREFIX:
        return default_network_id

    if not group_network_column_available(session):
        logger.debug("collaboration_group has no network_id column, using default network")
        return default_network_id

    groups = table(GROUP_TABLE, column("id"), column(NETWORK_COLUMN))
    row = session.execute(
        select(groups.c[NETWORK_COLUMN])
        .where(groups.c.id.in_(lookup_keys([subject_id])))
        .limit(1)
    ).first()

    if row is None:
        logger.debug(f"Group {subject_id} not found, using default network")
        return default_network_id
    return row[0]
