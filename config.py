import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    API_URL = data.get("API_URL", "https://gitlab.com")
    PRIVATE_TOKEN = data.get("PRIVATE_TOKEN", "")
    REQUEST_TIMEOUT = float(data.get("REQUEST_TIMEOUT", 30.0))
    USER_AGENT = data.get("USER_AGENT", "project-archive-client")
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
