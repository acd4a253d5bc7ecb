import logging
import logging.config
import os


def setup_logging(config_path: str = "logging.conf") -> logging.Logger:
    """Configure logging from an ini file, or a plain console setup when it is missing."""
    if os.path.exists(config_path):
        # Ensure logs directory exists
        os.makedirs("logs", exist_ok=True)
        logging.config.fileConfig(config_path, disable_existing_loggers=False)
    else:
        logging.basicConfig(
            level=logging.INFO,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

    return logging.getLogger()
