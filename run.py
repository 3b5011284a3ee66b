"""
Server Runner for the SwasthyaLink backend.

Usage:
    python run.py

Serves the chatbot, user directory and family network APIs under /api/*.
"""

import uvicorn

from backend.config import get_settings

if __name__ == "__main__":
    settings = get_settings()
    reload = settings.app_env.lower() in {"dev", "development", "local"}

    print(f"\n🚀 Starting SwasthyaLink API on http://{settings.host}:{settings.port}\n")

    uvicorn.run(
        "backend.main:app",
        host=settings.host,
        port=settings.port,
        reload=reload,
        reload_dirs=["backend"] if reload else None,
    )
