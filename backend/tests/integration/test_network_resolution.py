"""Integration tests for network resolution with schema introspection"""

import pytest
from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session

from domain.email_to_feed import group_network_column_available, resolve_network_id
from domain.records import NETWORK_KEY_PREFIX, USER_KEY_PREFIX, new_record_id, to_15

DEFAULT_NETWORK = "0DB000000000001"


class TestWithNetworkColumn:
    def test_column_detected(self, db_session):
        assert group_network_column_available(db_session) is True

    def test_group_network_used(self, db_session, make_group):
        network_id = new_record_id(NETWORK_KEY_PREFIX)
        group = make_group(network_id=network_id)

        assert resolve_network_id(db_session, group.id, DEFAULT_NETWORK) == network_id

    def test_15_char_group_id_matches(self, db_session, make_group):
        network_id = new_record_id(NETWORK_KEY_PREFIX)
        group = make_group(network_id=network_id)

        assert resolve_network_id(db_session, to_15(group.id), DEFAULT_NETWORK) == network_id

    def test_group_without_network_means_internal_org(self, db_session, make_group):
        group = make_group()
        assert resolve_network_id(db_session, group.id, DEFAULT_NETWORK) is None

    def test_unknown_group_falls_back(self, db_session):
        assert resolve_network_id(db_session, "0F9000000000077", DEFAULT_NETWORK) == DEFAULT_NETWORK

    def test_user_subject_falls_back(self, db_session):
        user_id = new_record_id(USER_KEY_PREFIX)
        assert resolve_network_id(db_session, user_id, DEFAULT_NETWORK) == DEFAULT_NETWORK
        assert resolve_network_id(db_session, user_id, None) is None


class TestWithoutNetworkColumn:
    @pytest.fixture
    def legacy_session(self):
        """A database whose collaboration_group table predates communities."""
        engine = create_engine("sqlite://")
        with engine.begin() as conn:
            conn.execute(text(
                "CREATE TABLE collaboration_group (id VARCHAR(18) PRIMARY KEY, name TEXT)"
            ))
            conn.execute(text(
                "INSERT INTO collaboration_group (id, name) VALUES ('0F9000000000001CAA', 'Old')"
            ))
        session = Session(bind=engine)
        try:
            yield session
        finally:
            session.close()
            engine.dispose()

    def test_column_missing(self, legacy_session):
        assert group_network_column_available(legacy_session) is False

    def test_group_falls_back_to_default(self, legacy_session):
        assert resolve_network_id(legacy_session, "0F9000000000001", DEFAULT_NETWORK) == DEFAULT_NETWORK

    def test_missing_table(self):
        engine = create_engine("sqlite://")
        with Session(bind=engine) as session:
            assert group_network_column_available(session) is False
