"""Export Codacy issue counts per repository and category to a Prometheus pushgateway."""

__version__ = "0.1.0"
