"""Root conftest: shared test configuration."""

import os

# Tests never talk to a real Firebase project
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("FIREBASE_PROJECT_ID", "jsonspark-test")
os.environ.setdefault("FIREBASE_CLIENT_EMAIL", "svc@jsonspark-test.iam.gserviceaccount.com")
os.environ.setdefault("FIREBASE_PRIVATE_KEY", "fake-private-key")
os.environ.setdefault("FIREBASE_DATABASE_URL", "https://jsonspark-test.firebaseio.com")
