"""
Run the Nemo AI backend with uvicorn.

Usage:
    python3 run.py
"""

import uvicorn

from nemo.config import settings

if __name__ == "__main__":
    uvicorn.run(
        "nemo.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )
