import logging
import os

import uvicorn
from dotenv import load_dotenv

from shared.config import settings
from shared.constants import DEV_PORT

load_dotenv()

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
)

from api.server import app

if __name__ == "__main__":
    port = int(os.environ.get("PORT", DEV_PORT))
    logging.getLogger("api").info(f"Starting Parcel Measurement API v{settings.APP_VERSION} on port {port}...")
    uvicorn.run(app, host="0.0.0.0", port=port)
