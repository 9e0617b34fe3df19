import os
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv

from errors import ConfigError

ROOT_URL = "https://api.zerossl.com"
VALIDITY_DAYS = 90
VALIDATION_METHOD = "HTTP_CSR_HASH"

# 1 initial status read + POLL_RETRIES reads, POLL_DELAY_SECONDS apart
POLL_RETRIES = 3
POLL_DELAY_SECONDS = 30

REQUEST_TIMEOUT = 30
DEFAULT_LOG_PATH = "app.log"

CERTIFICATE_FILE = "certificate.crt"
CA_BUNDLE_FILE = "ca_bundle.crt"


@dataclass
class Config:
    api_key: str
    api_url: str


def load_env():
    # .env next to where the tool runs, not next to this module
    load_dotenv(find_dotenv(usecwd=True))


def log_path():
    return os.getenv("ZEROSSL_LOG_PATH", DEFAULT_LOG_PATH)


def load_config():
    load_env()
    api_key = os.getenv("API_KEY")
    if not api_key:
        raise ConfigError("API_KEY is not set")

    return Config(api_key=api_key, api_url=ROOT_URL)
