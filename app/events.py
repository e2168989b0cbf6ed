import asyncio
import logging
import ssl

from aiomqtt import Client

from app import config

logger = logging.getLogger(__name__)

SPOT_OCCUPIED = "occupied"
SPOT_AVAILABLE = "available"

# Keeps detached publish tasks referenced until they finish
_pending_tasks = set()


def mqtt_enabled() -> bool:
    return bool(config.MQTT_HOST)


def spot_topic(spot_number: str) -> str:
    return config.MQTT_SPOT_TOPIC.format(spot_number=spot_number)


async def publish_mqtt(topic: str, message: str):
    try:
        tls_context = None

        if config.MQTT_TLS_ENABLED:
            logger.info("TLS is enabled. Setting up SSL context.")

            tls_context = ssl.create_default_context(ssl.Purpose.SERVER_AUTH)
            tls_context.load_verify_locations(cafile=config.MQTT_CA_CERT)
            tls_context.load_cert_chain(certfile=config.MQTT_CLIENT_CERT, keyfile=config.MQTT_CLIENT_KEY)

        port = config.MQTT_TLS_PORT if config.MQTT_TLS_ENABLED else config.MQTT_PORT
        logger.info(f"Connecting to MQTT broker at {config.MQTT_HOST}:{port}")

        async with Client(
            hostname=config.MQTT_HOST,
            port=port,
            username=config.MQTT_USERNAME,
            password=config.MQTT_PASSWORD,
            tls_context=tls_context
        ) as client:
            logger.info(f"Publishing message '{message}' to topic '{topic}'")
            await client.publish(topic, message.encode())
            logger.info(f"Successfully published '{message}' to '{topic}'")
    except Exception as e:
        logger.error(f"MQTT publish failed: {e}")


def announce_spot_status(spot_number: str, status: str):
    """Publish a spot status change in the background, if a broker is configured."""
    if not mqtt_enabled():
        logger.debug(f"MQTT disabled, spot {spot_number} is now {status}")
        return None

    task = asyncio.create_task(publish_mqtt(spot_topic(spot_number), status))
    _pending_tasks.add(task)
    task.add_done_callback(_pending_tasks.discard)
    return task
