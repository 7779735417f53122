"""Prometheus metrics for GroupMirror.

Defines and exposes operational metrics for monitoring and alerting.
"""

from prometheus_client import Counter, Histogram

# Group sync metrics
mirror_records_written_total = Counter(
    "groupmirror_mirror_records_written_total",
    "Total mirror records written by the group sync",
    ["operation"]  # operation: created|updated|deleted
)

group_sync_skipped_total = Counter(
    "groupmirror_group_sync_skipped_total",
    "Groups left untouched by the group sync",
    ["reason"]  # reason: inactive|policy|unchanged
)

group_sync_duration_seconds = Histogram(
    "groupmirror_group_sync_duration_seconds",
    "Time spent in a single group sync invocation in seconds",
    ["trigger"],  # trigger: upsert|delete|resync
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0]
)

# Inbound email metrics
inbound_emails_total = Counter(
    "groupmirror_inbound_emails_total",
    "Total inbound emails processed by the feed bot",
    ["source", "status"]  # source: smtp|api, status: posted|failed
)

feed_items_posted_total = Counter(
    "groupmirror_feed_items_posted_total",
    "Total feed items posted",
    ["has_mentions"]  # has_mentions: true|false
)
