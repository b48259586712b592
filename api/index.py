"""
Serverless entry point for the Citizen Engagement API
"""
import sys
import os

# Add parent directory to path
parent_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if parent_dir not in sys.path:
    sys.path.insert(0, parent_dir)

os.environ.setdefault("ENVIRONMENT", "production")
os.environ.setdefault("KEYWORDS_PATH", os.path.join(parent_dir, "categorization_keywords.yaml"))

from mangum import Mangum
from src.main import app

# Lifespan stays on: the classifier is built at startup
handler = Mangum(app, lifespan="auto")
