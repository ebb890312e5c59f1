import os
import uvicorn

if __name__ == "__main__":
    # .env next to the project root is picked up by app.core.config
    host = os.environ.get("HOST", "0.0.0.0")
    port = int(os.environ.get("PORT", "5000"))
    reload = os.environ.get("RELOAD", "").lower() in ("1", "true", "yes")

    print(f"Starting Inventory Management API on {host}:{port}...")

    # String import path so uvicorn can reload the app when RELOAD is set
    uvicorn.run("app.main:app", host=host, port=port, log_level="info", reload=reload)
