"""Run the relay: python -m stat_relay"""

import uvicorn

from stat_relay.core.config import settings

if __name__ == "__main__":
    uvicorn.run("stat_relay.main:app", host=settings.HOST, port=settings.PORT)
