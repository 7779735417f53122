"""Group source adapters."""

from .sqlalchemy_group_source import SqlAlchemyGroupSource, build_photo_url

__all__ = ["SqlAlchemyGroupSource", "build_photo_url"]
