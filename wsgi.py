import os
import sys

# Add the src directory to the Python path
src_path = os.path.join(os.path.abspath('.'), 'src')
if src_path not in sys.path:
    sys.path.insert(0, src_path)

from record_helpers.utils.logging_setup import setup_logging
from record_helpers.config import Config
from record_helpers.web import create_app

setup_logging(log_dir=Config.LOG_DIR, level=Config.LOG_LEVEL)
application = create_app()

if __name__ == "__main__":
    application.run(debug=True)
