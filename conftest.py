"""
Root pytest configuration.
Must run before the application is imported so that core.config picks the
in-memory SQLite database instead of PostgreSQL.
"""
import os

os.environ["TESTING"] = "True"
os.environ["DEBUG"] = "False"
os.environ["SEED_DATA"] = "False"
