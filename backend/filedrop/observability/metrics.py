"""Prometheus metrics for FileDrop.

Defines and exposes operational metrics for monitoring and alerting.
"""

from prometheus_client import Counter, Histogram

# Intake metrics
uploads_total = Counter(
    "filedrop_uploads_total",
    "Total number of upload intake attempts",
    ["source", "status"]  # source: multipart|data_uri, status: stored|rejected|error
)

upload_size_bytes = Histogram(
    "filedrop_upload_size_bytes",
    "Size of stored uploads in bytes",
    ["source"],
    buckets=[1024, 10_240, 102_400, 1_048_576, 10_485_760, 52_428_800, 104_857_600]
)

transfer_errors_total = Counter(
    "filedrop_transfer_errors_total",
    "Failed transfers by classified kind",
    ["kind"]
)

# Lifecycle metrics
promotions_total = Counter(
    "filedrop_promotions_total",
    "Total number of promotions to a permanent directory",
    ["status"]  # status: success|error
)
