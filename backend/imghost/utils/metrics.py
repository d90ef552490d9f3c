"""
Prometheus metrics definitions.
All metrics are registered here and can be imported by other modules.
"""
from prometheus_client import Counter, Histogram

# HTTP request metrics
http_requests_total = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'path', 'status']
)

http_request_duration_seconds = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'path'],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0]
)

# Error metrics
errors_total = Counter(
    'errors_total',
    'Total errors',
    ['error_type']
)

# Upload metrics
uploads_total = Counter(
    'uploads_total',
    'Total uploads by provider and outcome',
    ['provider', 'status']
)

upload_duration_seconds = Histogram(
    'upload_duration_seconds',
    'Upload duration in seconds, payload resolution included',
    ['provider'],
    buckets=[0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0, 60.0]
)

upload_bytes = Histogram(
    'upload_bytes',
    'Size of uploaded payloads in bytes',
    ['provider'],
    buckets=[1024, 16384, 131072, 524288, 1048576, 4194304, 16777216, 67108864]
)
