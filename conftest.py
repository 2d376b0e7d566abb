import os

# Configuration is loaded on first import of the application packages
os.environ.setdefault("APP_ENVIRONMENT", "test")

pytest_plugins = ["tests.fixtures"]
