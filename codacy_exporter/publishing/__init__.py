"""Publishing of Codacy issue counts to a Prometheus pushgateway."""

from .pushgateway import PushgatewayPublisher

__all__ = ["PushgatewayPublisher"]
