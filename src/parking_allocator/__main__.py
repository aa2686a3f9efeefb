# File: src/parking_allocator/__main__.py
import sys

from .main import main

sys.exit(main())
