"""Configure test suite environment"""
import os
import sys

# Project root on the path so tests import ``src`` without installing
project_root = os.path.abspath(os.path.dirname(__file__))
sys.path.insert(0, project_root)

# Handlers build their Tracer and Logger at import time
os.environ.setdefault("POWERTOOLS_TRACE_DISABLED", "true")
os.environ.setdefault("POWERTOOLS_SERVICE_NAME", "cycle-insights-test")
os.environ.setdefault("LOG_LEVEL", "DEBUG")
