import logging
import os
from logging.handlers import RotatingFileHandler

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


def setup_logging(app):
    try:
        log_file_path = app.config.get("LOG_FILE") or os.path.join(os.path.dirname(__file__), '../..', 'app.log')
        log_file_path = os.path.abspath(log_file_path)

        # Rotating file handler next to the project root unless LOG_FILE says otherwise
        file_handler = RotatingFileHandler(log_file_path, maxBytes=10000, backupCount=3)
        file_handler.setLevel(logging.INFO)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))

        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT))

        # app.logger is the "install_dashboard" logger, service module loggers propagate to it.
        # Drop handlers left by an earlier create_app() so lines are not repeated.
        for handler in list(app.logger.handlers):
            app.logger.removeHandler(handler)
            handler.close()
        app.logger.setLevel(logging.INFO)
        app.logger.addHandler(file_handler)
        app.logger.addHandler(console_handler)

        app.logger.info("Logging setup complete, writing to %s", log_file_path)
    except Exception as e:
        print(f"Error setting up logging: {e}")
