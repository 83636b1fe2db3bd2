# =======================================================================================
# rfid_dashboard/__main__.py - Process Entry Point
# =======================================================================================
import uvicorn

from .config import config


def main():
    uvicorn.run(
        "rfid_dashboard.main:app",
        host=config.API_HOST,
        port=config.PORT,
        log_level=config.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
