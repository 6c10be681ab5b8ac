# backend/proconnect/auth/__init__.py
# Import routes to register them with the Router
from . import routes
