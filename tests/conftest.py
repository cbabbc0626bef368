import sys
from pathlib import Path

# Make the repository root importable so the top-level ``shared`` and
# ``keyward`` packages resolve without an editable install.
repo_root = Path(__file__).resolve().parents[1]
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))
