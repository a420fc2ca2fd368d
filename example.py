import functools
import logging

from rotation_ingest import HttpIngestionGateway, create_strategy
from rotation_ingest.handler import IngestingRotatingFileHandler


def fetch_token(auth):
    # Replace with a call to your identity provider.
    return "token"


strategy = create_strategy(
    {
        "endpoint": "https://ingest.example.com",
        "appId": "client-id",
        "datasetName": "logs",
        "tableName": "AppLogs",
        "mappingName": "logsMap",
        "mappingKind": "json",
        "fileIndexMax": 5,
    },
    gateway_factory=functools.partial(HttpIngestionGateway.open, token_provider=fetch_token, timeout=10),
)

handler = IngestingRotatingFileHandler("app.log", strategy, maxBytes=1024)
handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))

logger = logging.getLogger("example")
logger.setLevel(logging.INFO)
logger.addHandler(handler)

for index in range(100):
    logger.info("event %d", index)

# Closing the handler also closes the ingestion session.
handler.close()
