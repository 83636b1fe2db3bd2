# =======================================================================================
# rfid_dashboard/__init__.py - Package Initialization
# =======================================================================================
"""
RFID Dashboard Backend

Authenticates dashboard users, records RFID access events reported by field
devices and pushes each new event to connected dashboards in real time.
"""

__version__ = "1.0.0"
__author__ = "RFID Access Control Team"
