"""Test configuration and setup for pytest.

This file is automatically loaded by pytest and sets up the Python path
so that all test files can import bamboo_client without installing it.
"""

import sys
from pathlib import Path

# Add the src directory to Python path so that 'bamboo_client' imports work
src_dir = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_dir))

# Add test directory to path for test helpers
test_dir = Path(__file__).parent
sys.path.insert(0, str(test_dir))
