import os
import tempfile

# `main` builds a module-level app on import; give it a throwaway environment
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="uploads-"))
