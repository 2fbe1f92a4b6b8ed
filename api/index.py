from mangum import Mangum
import logging
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from token_ledger.api import app, settings

logging.basicConfig(level=settings.log_level.upper())

app.root_path = "/api"

handler = Mangum(app)
