# run_dev.py
"""
Local development launcher for the G-access API.
Roughly: `uvicorn gaccess.app:app --reload --host 0.0.0.0 --port $PORT`
"""

import os

import uvicorn

from gaccess.settings import settings

if __name__ == "__main__":
    uvicorn.run(
        "gaccess.app:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )
