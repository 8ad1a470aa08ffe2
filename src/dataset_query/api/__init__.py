"""FastAPI application and routes.

The app should be imported directly from app module to avoid
import-time side effects:

    from dataset_query.api.app import app
"""
