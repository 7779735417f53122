"""Exceptions raised while turning inbound emails into feed posts."""


class EmailToFeedError(Exception):
    """Base exception for the inbound email handler."""
    pass


class InvalidEmailBodyError(EmailToFeedError):
    """The email body lacks a subjectId or a message."""
    pass
