"""Global pytest configuration."""

import os

# Tests run in offline mode without AI unless a test opts in explicitly
os.environ.pop("DATABASE_URL", None)
os.environ.pop("OPENAI_API_KEY", None)
os.environ.setdefault("LOCAL_STORE_DIR", os.path.join(os.path.dirname(__file__), ".pytest_tripflow"))
