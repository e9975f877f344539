# tests/conftest.py

import os

# The GUI tests build real widgets; run them without a display server.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
