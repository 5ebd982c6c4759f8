"""Global pytest configuration."""

import os
import tempfile

# Set engines and root dir for tests before any imports
os.environ.setdefault("ROOT_DIR", tempfile.mkdtemp(prefix="zproposal-tests-"))
os.environ.setdefault("STORAGE_ENGINE", "Memory")
os.environ.setdefault("CLIPBOARD_ENGINE", "Memory")
