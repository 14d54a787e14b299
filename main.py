"""SlotWatch

Watches an event calendar for bookable slots and notifies when availability changes.
"""
import sys

from slotwatch.cli import main

if __name__ == "__main__":
    sys.exit(main())
