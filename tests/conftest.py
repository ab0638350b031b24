"""
Pytest configuration shared by every test package.
Loads .env.test when present so local credentials in .env never leak into tests.
"""

from pathlib import Path

from dotenv import load_dotenv

env_test_path = Path(__file__).parent / ".env.test"
if env_test_path.exists():
    load_dotenv(env_test_path, override=True)
