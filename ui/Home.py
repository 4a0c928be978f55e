# Streamlit entry point: streamlit run ui/Home.py (relay must be running: uvicorn relay.main:app)
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from ui.main_content import run_main

run_main()
