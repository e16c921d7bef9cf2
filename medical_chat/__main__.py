"""
Entry point for running the relay host as a module:
    python -m medical_chat
"""

import asyncio
from .main import main

if __name__ == "__main__":
    asyncio.run(main())
