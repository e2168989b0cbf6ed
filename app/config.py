import os

# Environment variables
APP_TITLE = os.getenv("APP_TITLE", "Parking Ledger")
ROOT_PATH = os.getenv("ROOT_PATH", "")
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
SEED_DEMO_DATA = os.getenv("SEED_DEMO_DATA", "true").lower() == "true"

MQTT_HOST = os.getenv("MQTT_HOST")
MQTT_PORT = int(os.getenv("MQTT_PORT", "1883"))
MQTT_TLS_PORT = int(os.getenv("MQTT_TLS_PORT", "8883"))
MQTT_USERNAME = os.getenv("MQTT_USERNAME")
MQTT_PASSWORD = os.getenv("MQTT_PASSWORD")
MQTT_SPOT_TOPIC = os.getenv("MQTT_SPOT_TOPIC", "parking/spots/{spot_number}")
MQTT_TLS_ENABLED = os.getenv("MQTT_TLS_ENABLED", "false").lower() == "true"

# Compute default certificate paths relative to this file
BASE_DIR = os.path.dirname(os.path.abspath(__file__))
MQTT_CA_CERT = os.getenv("MQTT_CA_CERT", os.path.join(BASE_DIR, "mqtt", "iot_mqtt_ca.crt"))
MQTT_CLIENT_CERT = os.getenv("MQTT_CLIENT_CERT", os.path.join(BASE_DIR, "mqtt", "iot_mqtt_client.crt"))
MQTT_CLIENT_KEY = os.getenv("MQTT_CLIENT_KEY", os.path.join(BASE_DIR, "mqtt", "iot_mqtt_client.key"))
