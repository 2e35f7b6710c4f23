"""Tests for codacy_exporter.publishing.pushgateway exercising per-category pushes.

Run with coverage:
    pytest tests/test_pushgateway.py --maxfail=1 -v --cov=codacy_exporter.publishing.pushgateway --cov-report=term-missing
"""

from unittest.mock import patch

from codacy_exporter.publishing.pushgateway import METRIC_NAME, PUSH_JOB, PushgatewayPublisher


def _sample_value(registry):
    return registry.get_sample_value(METRIC_NAME)


@patch("codacy_exporter.publishing.pushgateway.push_to_gateway")
def test_push_category_groups_by_category_and_repository(mock_push):
    publisher = PushgatewayPublisher("localhost:9091", timeout=5)
    publisher.push_category("alpha", "Security", 3)

    mock_push.assert_called_once()
    args, kwargs = mock_push.call_args
    assert args == ("localhost:9091",)
    assert kwargs["job"] == PUSH_JOB
    assert kwargs["grouping_key"] == {"Categories": "Security", "Repository": "alpha"}
    assert kwargs["timeout"] == 5
    assert _sample_value(kwargs["registry"]) == 3.0


@patch("codacy_exporter.publishing.pushgateway.push_to_gateway")
def test_publish_continues_after_failed_category(mock_push, capsys):
    mock_push.side_effect = [OSError("gateway down"), None, None]
    publisher = PushgatewayPublisher("localhost:9091")

    failed = publisher.publish("alpha", {"Security": 3, "Complexity": 1, "Style": 0})

    assert failed == ["Security"]
    assert mock_push.call_count == 3
    out = capsys.readouterr().out
    assert "Security" in out and "alpha" in out


@patch("codacy_exporter.publishing.pushgateway.push_to_gateway")
def test_repeated_publish_does_not_accumulate(mock_push):
    publisher = PushgatewayPublisher("localhost:9091")
    publisher.publish("alpha", {"Security": 3})
    publisher.publish("alpha", {"Security": 3})

    registries = [call.kwargs["registry"] for call in mock_push.call_args_list]
    assert len(registries) == 2
    assert registries[0] is not registries[1]
    assert [_sample_value(registry) for registry in registries] == [3.0, 3.0]


@patch("codacy_exporter.publishing.pushgateway.push_to_gateway")
def test_dry_run_prints_instead_of_pushing(mock_push, capsys):
    publisher = PushgatewayPublisher("localhost:9091", dry_run=True)
    assert publisher.publish("alpha", {"Security": 3}) == []
    assert not mock_push.called
    assert "[dry-run]" in capsys.readouterr().out
