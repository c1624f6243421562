import os

import uvicorn

if __name__ == "__main__":
    # Reload only when asked for; production runs a single process
    reload = os.getenv("RELOAD", "false").lower() == "true"

    uvicorn.run(
        "procurement.main:app",
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8000")),
        reload=reload,
        log_level="info"
    )
