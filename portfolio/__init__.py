"""
Portfolio backend project package.
"""
import time

# Monotonic mark taken when the project package is first imported.
PROCESS_STARTED_AT = time.monotonic()
