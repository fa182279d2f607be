import sys
import os

# Add src/ to sys.path so absolute imports (core.*, hostsfile.*, etc.) work.
_project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, os.path.join(_project_root, "src"))
sys.path.insert(0, _project_root)

# Importing app.main builds the module-level app; keep it off /etc/hosts
os.environ.setdefault("HOSTS_EDITOR_LOAD_ON_STARTUP", "false")
os.environ.setdefault("HOSTS_EDITOR_ELEVATION", "none")
