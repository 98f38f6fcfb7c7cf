"""
Vercel Serverless Function Entry Point

Exposes the FastAPI application as a Vercel serverless function.
All routes live under /api and are handled by this single entry point.
"""

import sys
from pathlib import Path

# Ensure project root is in path for imports
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from mangum import Mangum

from commlog_api.main import create_app

app = create_app(prefix="/api")

# Mangum adapter for AWS Lambda/Vercel
handler = Mangum(app, lifespan="off")
