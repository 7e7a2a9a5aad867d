import os
from flask import Flask
import logging
from logging.handlers import RotatingFileHandler
from config import BASE_DIR


def create_app(config_object='config.Config'):
    app = Flask(__name__)
    app.config.from_object(config_object)

    if not app.debug and not app.testing:
        logs_dir = os.path.join(BASE_DIR, 'logs')
        log_file = os.path.join(logs_dir, 'app.log')

        os.makedirs(logs_dir, exist_ok=True)

        file_handler = RotatingFileHandler(log_file,
                                           maxBytes=app.config['LOG_FILE_MAX_BYTES'],
                                           backupCount=app.config['LOG_BACKUP_COUNT'])
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
        ))
        file_handler.setLevel(logging.INFO)
        app.logger.addHandler(file_handler)

        app.logger.setLevel(logging.INFO)
        app.logger.info('Приложение Clinic Schedule Importer запущено')

    from . import api_routes
    app.register_blueprint(api_routes.bp)

    return app
