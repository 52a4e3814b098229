"""
Streamlit entry point:
    streamlit run frontend/streamlit_app.py
"""

import sys
from pathlib import Path

# Ensure project root is on sys.path so the frontend and catalog packages import
sys.path.insert(0, str(Path(__file__).parent.parent))

from frontend.ui import main

main()
