from unittest.mock import AsyncMock, MagicMock

from app import config, events


async def test_announce_is_a_no_op_without_broker(monkeypatch):
    monkeypatch.setattr(config, "MQTT_HOST", None)

    assert events.announce_spot_status("A1", events.SPOT_OCCUPIED) is None


async def test_announce_publishes_spot_status(monkeypatch):
    client = MagicMock()
    client.publish = AsyncMock()
    client_cls = MagicMock()
    client_cls.return_value.__aenter__ = AsyncMock(return_value=client)
    client_cls.return_value.__aexit__ = AsyncMock(return_value=False)

    monkeypatch.setattr(config, "MQTT_HOST", "broker.local")
    monkeypatch.setattr(config, "MQTT_TLS_ENABLED", False)
    monkeypatch.setattr(events, "Client", client_cls)

    task = events.announce_spot_status("A1", events.SPOT_AVAILABLE)
    await task

    client_cls.assert_called_once_with(
        hostname="broker.local",
        port=config.MQTT_PORT,
        username=config.MQTT_USERNAME,
        password=config.MQTT_PASSWORD,
        tls_context=None,
    )
    client.publish.assert_awaited_once_with("parking/spots/A1", b"available")


async def test_publish_failure_is_logged_not_raised(monkeypatch, caplog):
    client_cls = MagicMock(side_effect=OSError("connection refused"))

    monkeypatch.setattr(config, "MQTT_HOST", "broker.local")
    monkeypatch.setattr(config, "MQTT_TLS_ENABLED", False)
    monkeypatch.setattr(events, "Client", client_cls)

    await events.publish_mqtt("parking/spots/A1", "occupied")

    assert "MQTT publish failed: connection refused" in caplog.text
