# handler.py
"""AWS Lambda handler using Mangum adapter for FastAPI.

This module provides the entry point for AWS Lambda to invoke
the FastAPI application. Mangum translates API Gateway events
to ASGI format that FastAPI understands.
"""

import os
import logging

from mangum import Mangum
from app.main import app

# The Lambda runtime installs the root handler; only the level is ours
logger = logging.getLogger()
logger.setLevel(os.getenv("LOG_LEVEL", "INFO").upper())

# lifespan="off" disables ASGI lifespan events which aren't needed in Lambda
asgi_handler = Mangum(app, lifespan="off")


def handler(event, context):
    """Log the incoming request and hand it to the ASGI app."""
    logger.info(f"Received {event.get('httpMethod')} {event.get('path')}")
    logger.debug(event)
    return asgi_handler(event, context)
